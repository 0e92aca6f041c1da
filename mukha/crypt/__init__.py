"""
The `crypt` package provides the password utilities used by the
authentication workflows.

Contents
--------
- encrypt_decrypt
    Utility module exposing the `EncryptionDec` class:
        * `hash_password`: securely hashes plaintext passwords using bcrypt
        * `check_passwords`: verifies a plaintext password against a hashed one
"""

"""
Service layer.

Contents:
    - funcs: transactional operations for accounts, knowledge entries and transcripts
    - policy: the account policy (restricted emails, admin bootstrap) and display-name rules
"""

"""
The `helpers` package provides utilities that support database operations.

Contents
--------
- transactionManagement
    - Context variable (`db_session_context`) for propagating the active session across function calls without explicit passing
    - `@transactional` decorator: reuses an active session or creates, commits and closes a new one, rolling back on errors
"""

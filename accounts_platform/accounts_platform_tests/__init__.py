"""
account_service tests

Covers the backend of the account service:

- Registration and login (`test_auth.py`)
- Token issuing and verification (`test_tokens.py`)
- Profile and organisation access rules (`test_policy.py`, `test_users.py`, `test_organisations.py`)
- Schema creation (`test_db_init.py`)
"""

"""
security/auth.py
-----------------
Password digests for credential checks.
Passwords are stored as SHA-256 hex digests (64 characters); the users
repository compares digests, never plain text.
"""

import hashlib


def hash_password(password: str) -> str:
    """Return the SHA-256 hex digest of a plain-text password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()

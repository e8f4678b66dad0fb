"""
Security module for the issue tracker.

Provides:
- bcrypt password hashing for member credentials
"""

from .passwords import hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
]

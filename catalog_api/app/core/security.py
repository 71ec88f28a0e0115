"""
Password hashing helpers.

Passwords are hashed with PBKDF2-HMAC-SHA256 from the standard library
and a per-password random salt.  The stored string has the form
``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>`` so the iteration
count can be raised later without invalidating existing hashes.
"""

import hashlib
import os

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 100_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = ITERATIONS) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : int
        PBKDF2 work factor.

    Returns
    -------
    str
        Algorithm, iterations, salt and hash joined with ``$``.
    """
    salt = os.urandom(SALT_BYTES)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${dk.hex()}"

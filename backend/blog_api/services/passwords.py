"""
Blog Backend — Credential Hasher
=================================

What:  One-way salted bcrypt hashing and verification of plaintext passwords.
How:   `bcrypt.gensalt(rounds)` embeds a fresh salt and the cost factor in
       every digest; `bcrypt.checkpw` re-derives and compares in constant time.
Who:   AuthService (registration hashes, login verifies).

Input window:
    bcrypt only consumes the first 72 bytes of its input and recent releases
    raise on anything longer. Passwords are UTF-8 encoded and cut to 72 bytes
    on both the hash and verify side, so long passwords hash consistently
    instead of failing. Accepted consequence: two passwords that share their
    first 72 bytes verify against each other's digest, as with any bcrypt
    implementation.

Concurrency:
    Instances hold nothing but the cost factor. Hashing is CPU-bound, so
    async callers run it in a worker thread (see AuthService).
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    Salted adaptive password hashing.

    Attributes:
        rounds: bcrypt cost factor (4-31; configured via BCRYPT_ROUNDS)
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Return a bcrypt digest (`$2b$<cost>$<salt><hash>`) for `plaintext`."""
        digest = bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("ascii")

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Check `plaintext` against a stored digest.

        Returns False (never raises) for a mismatch, a malformed digest, or
        non-string input.
        """
        if not isinstance(plaintext, str) or not isinstance(digest, str):
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

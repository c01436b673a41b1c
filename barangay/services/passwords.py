import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt"""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        hashed = bcrypt.hashpw(self._encode(plaintext), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, secret_hash: str) -> bool:
        """
        Checks plaintext against a stored hash. bcrypt.checkpw compares in
        constant time; a malformed stored hash never matches.
        """
        try:
            return bcrypt.checkpw(self._encode(plaintext), secret_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Password verification against malformed hash")
            return False

"""
PIN hashing primitive (bcrypt) shared by kiosk PINs and admin passwords
"""
import bcrypt

from timeclock.core.config import settings


class PinHasher:
    def __init__(self, rounds: int = None) -> None:
        self.rounds = rounds or settings.PIN_HASH_ROUNDS

    def hash(self, plaintext: str) -> str:
        """Return a salted bcrypt hash of plaintext"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Check plaintext against a stored hash

        Malformed hashes never match, they don't raise.
        """
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False

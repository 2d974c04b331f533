import base64
import hashlib
import bcrypt
from config import BCRYPT_ROUNDS


class SecurityManager:
    """Hashes and checks the per-post delete passwords.

    Passwords are SHA-256 digested before bcrypt so that inputs longer than
    bcrypt's 72 byte limit still compare over their full length.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    @staticmethod
    def _digest(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode('utf-8')).digest())

    def hash_password(self, password: str) -> str:
        """Generate the stored form of a delete password"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._digest(password), salt).decode('utf-8')

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a submitted delete password against the stored hash"""
        try:
            return bcrypt.checkpw(self._digest(password), hashed.encode('utf-8'))
        except ValueError:
            # stored value is not a bcrypt hash
            return False

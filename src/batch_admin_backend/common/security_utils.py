'''
Credential hashing, kept apart from the JWT helpers in services/security.py
so the user services can hash passwords without a circular import.
'''
from passlib.context import CryptContext

from .config import settings


class HashedPassword:
    """One-way bcrypt hashing of account passwords."""
    pwd_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )

    @classmethod
    def verify(cls, plain_password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        return cls.pwd_context.verify(plain_password, hashed_password)

    @classmethod
    def get_hash(cls, password: str) -> str:
        return cls.pwd_context.hash(password)

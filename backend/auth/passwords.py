import bcrypt

from backend.core import config


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False

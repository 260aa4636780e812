from passlib.context import CryptContext

from voyagehub.logging_config import get_logger

logger = get_logger(__name__)

# pbkdf2_sha256 is pure Python and needs no native bcrypt backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError) as e:
        # Malformed stored hash; treat as a failed login instead of a 500
        logger.warning(f"Password hash could not be verified: {e}")
        return False

import bcrypt
import structlog
from .errors import HashingError

logger = structlog.get_logger(__name__)

def hash_password(password: str, rounds: int = 12) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as e:
        logger.error("Password hashing failed", error=str(e))
        raise HashingError() from e
    return hashed.decode("utf-8")

def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        # unusable stored hash, or a password bcrypt refuses to process
        logger.warning("Password verification failed", error=str(e))
        return False

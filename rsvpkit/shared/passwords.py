import logging
from passlib.context import CryptContext
from passlib.handlers import bcrypt as passlib_bcrypt

logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

# Current bcrypt releases reject secrets over 72 bytes outright, which trips
# passlib's wrap-bug probe; bcrypt_sha256 pre-hashes so the probe is moot.
passlib_bcrypt._BcryptBackend._workrounds_initialized = True

pwd_ctx = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
)


def hash_password(plain: str) -> str:
    """Return bcrypt_sha256 hash for plain password."""
    return pwd_ctx.hash(plain)


def check_password(plain: str, hashed: str) -> bool:
    """Verify plain password against hash."""
    if not plain or not hashed:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except ValueError:
        return False

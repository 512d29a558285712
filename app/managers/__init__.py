from app.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_password,
)
from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from app.managers.token_manager import create_session_token, decode_session_token
from app.managers.ttl_cache import TTLCache

__all__ = [
    "PasswordHasher",
    "TTLCache",
    "create_session_token",
    "decode_session_token",
    "get_password_hasher",
    "hash_password",
    "limiter",
    "rate_limit_exceeded_handler",
    "verify_password",
]

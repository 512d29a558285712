"""
Password hashing for Inkwell accounts.

New hashes are always Argon2id, tuned by ``PASSWORD_SECURITY_LEVEL``.
Accounts provisioned before the switch to argon2 carry bcrypt hashes
(``$2a$``/``$2b$``, cost 10); those verify normally but are never produced.

Argon2 is deliberately slow, so the coroutine helpers push the work onto a
dedicated thread pool and the event loop keeps serving other requests.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor
from functools import cache

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import CONFIG_MAP, settings
from app.errors import PasswordHashingError
from app.monitoring import get_logger

HASHING_THREADS = 4

executor = ThreadPoolExecutor(max_workers=HASHING_THREADS, thread_name_prefix="pwhash")
logger = get_logger(__name__)


def build_context(level: str) -> CryptContext:
    """
    Create the passlib context for a security level.

    Args:
        level: Key into ``CONFIG_MAP`` (``low``, ``medium`` or ``high``)

    Returns:
        CryptContext: argon2 for new hashes, bcrypt for reading old ones
    """
    params = CONFIG_MAP[level]
    return CryptContext(
        schemes=["argon2", "bcrypt"],
        default="argon2",
        deprecated=["bcrypt"],
        argon2__type="ID",
        argon2__memory_cost=params.memory_cost,
        argon2__time_cost=params.time_cost,
        argon2__parallelism=params.parallelism,
    )


class PasswordHasher:
    """Hash and check account passwords with a fixed security level."""

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        self.context = build_context(self.level)
        logger.info("Password hasher ready", security_level=self.level)

    def hash(self, password: str) -> str:
        """
        Produce an Argon2id hash for storage in ``users.password``.

        Args:
            password: Plaintext password, already length-checked by the caller

        Returns:
            str: Encoded hash including salt and parameters

        Raises:
            ValueError: If the password is empty
            PasswordHashingError: If the argon2 backend fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Password hashing failed", security_level=self.level)
            msg = "Failed to hash password"
            raise PasswordHashingError(msg) from e

    def verify(self, password: str, stored_hash: str | None) -> bool:
        """
        Check a login attempt against the stored hash.

        Without a usable hash a dummy verification still runs, so an unknown
        email costs as much time as a wrong password.

        Args:
            password: Plaintext password from the request
            stored_hash: Value of ``users.password``, possibly missing

        Returns:
            bool: True only when the password matches
        """
        if not isinstance(stored_hash, str) or not stored_hash.strip():
            self.context.dummy_verify()
            return False

        try:
            return self.context.verify(password, stored_hash)
        except ValueError:
            logger.warning("Stored password hash is not in a known format")
            return False


@cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher built from settings on first use."""
    return PasswordHasher()


async def hash_password(password: str) -> str:
    """Hash ``password`` on the hashing pool."""
    loop = get_running_loop()
    return await loop.run_in_executor(executor, get_password_hasher().hash, password)


async def verify_password(password: str, stored_hash: str | None) -> bool:
    """Verify ``password`` against ``stored_hash`` on the hashing pool."""
    loop = get_running_loop()
    return await loop.run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        stored_hash,
    )

"""Authentication gate: credential checks and session issuance."""

from app.managers.password_manager import verify_password
from app.managers.token_manager import create_session_token
from app.managers.ttl_cache import TTLCache
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.auth import AuthIdentity, AuthResult, AuthStatus, AuthUser

logger = get_logger(__name__)


class AuthService:
    """
    Service for authorizing credentials and issuing sessions.

    Identity records are looked up through an expiring cache keyed by email;
    cache misses fall back to the user repository. Repository errors
    propagate to the caller.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        identity_cache: TTLCache[AuthUser] | None = None,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            identity_cache: Optional expiring cache of identity records
        """
        self.user_repo = user_repo
        self._identity_cache = identity_cache

    async def _find_identity(self, email: str) -> AuthUser | None:
        """Look up an identity record, consulting the cache first."""
        if self._identity_cache is not None:
            cached = self._identity_cache.get(email)
            if cached is not None:
                return cached

        user = await self.user_repo.find_auth_user(email)
        # Only found users are cached
        if user is not None and self._identity_cache is not None:
            self._identity_cache.set(email, user)
        return user

    async def authorize(self, email: str | None, password: str | None) -> AuthResult:
        """
        Check credentials and return a typed result.

        Banned status is checked before the password is compared.

        Args:
            email: Submitted email
            password: Submitted plain password

        Returns:
            AuthResult: OK with identity, BANNED, or INVALID_CREDENTIALS
        """
        if not email or not password:
            return AuthResult(status=AuthStatus.INVALID_CREDENTIALS)

        user = await self._find_identity(email)
        if user is None:
            # Same hashing cost as a wrong password for a known account
            await verify_password(password, None)
            logger.info("Login rejected: unknown account", email=email)
            return AuthResult(status=AuthStatus.INVALID_CREDENTIALS)

        if user.status == "banned":
            logger.warning("Login rejected: banned account", user_id=user.id)
            return AuthResult(status=AuthStatus.BANNED)

        if not await verify_password(password, user.password):
            logger.info("Login rejected: wrong password", user_id=user.id)
            return AuthResult(status=AuthStatus.INVALID_CREDENTIALS)

        logger.info("Login succeeded", user_id=user.id, role=user.role)
        return AuthResult(status=AuthStatus.OK, identity=user.to_identity())

    async def verify_password(self, password: str, password_hash: str | None) -> bool:
        """
        Compare a plain password with a stored hash.

        Args:
            password: Plain password
            password_hash: Stored hash; None never matches

        Returns:
            bool: True if the password matches
        """
        return await verify_password(password, password_hash)

    def create_session(self, identity: AuthIdentity) -> str:
        """Issue a session token for an authorized identity."""
        return create_session_token(identity)

    def forget(self, email: str) -> None:
        """Drop a cached identity record, e.g. after a password change."""
        if self._identity_cache is not None:
            self._identity_cache.invalidate(email)

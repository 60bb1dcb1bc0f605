"""Authentication service - handles registration, login and token resolution."""
from ...config import BEARER_PREFIX
from ...domain.entities import Session
from ...domain.repositories import SessionRepository, UserRepository
from ...errors import AuthenticationError, ValidationError
from ...logger import logger


def extract_token(header_value: str | None) -> str | None:
    """Pull the session token out of an Authorization header.

    Accepts both a raw token and ``Bearer <token>``.

    Returns:
        Token string, or None when the header is missing or empty
    """
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == BEARER_PREFIX.strip().lower():
        value = credentials.strip()
    return value or None


class AuthService:
    """Service for authentication operations.

    Responsibilities:
    - User registration with an immediate session
    - Credential login
    - Resolving bearer tokens to sessions
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository
    ):
        self.user_repo = user_repository
        self.session_repo = session_repository

    async def register(self, username: str, password: str) -> Session:
        """Register a user and log them in.

        Raises:
            ValidationError: username already taken
        """
        if await self.user_repo.find_by_username(username) is not None:
            raise ValidationError({"username": ["Username already taken"]})

        user = await self.user_repo.register(username, password)
        session = await self.session_repo.create(user)
        logger.info("User registered: id={} username={}", user.id, user.username)
        return session

    async def login(self, username: str, password: str) -> Session:
        """Verify credentials and open a new session.

        Raises:
            AuthenticationError: unknown user or wrong password
        """
        user = await self.user_repo.find_by_credentials(username, password)
        if user is None:
            logger.warning("Login failed for username={}", username)
            raise AuthenticationError("Invalid username or password")

        session = await self.session_repo.create(user)
        logger.info("Login succeeded: user_id={}", user.id)
        return session

    async def resolve(self, header_value: str | None) -> Session:
        """Resolve an Authorization header to a live session.

        Raises:
            AuthenticationError: header missing or token unknown
        """
        token = extract_token(header_value)
        if token is None:
            raise AuthenticationError()

        session = await self.session_repo.find_by_token(token)
        if session is None:
            raise AuthenticationError()
        return session

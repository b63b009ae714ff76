"""
User service.

Identity resolution by email, user creation with derived referral codes,
and registration under an optional referrer.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.referral.code_generator import generate_referral_code
from app.services.referral.config import REFERRAL_CODE_MAX_ATTEMPTS
from app.utils.exceptions import NotFoundError, ReferralCodeExhaustedError
from app.validators.common import normalize_email, validate_referral_code


class UserService:
    """
    User service.

    Does not commit: the request scope owns the transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
    ) -> None:
        """
        Initialize user service.

        Args:
            session: Database session
            user_repo: Override for user storage
        """
        self.session = session
        self.user_repo = user_repo or UserRepository(session)

    async def find_by_email(self, email: str) -> User | None:
        """
        Find user by email.

        Args:
            email: Email address (normalized before lookup)

        Returns:
            User or None
        """
        return await self.user_repo.get_by_email(email)

    async def find_by_referral_code(self, code: str) -> User | None:
        """
        Find user by referral code.

        Args:
            code: Referral code

        Returns:
            User or None
        """
        return await self.user_repo.get_by_referral_code(code)

    async def get_by_email_or_raise(self, email: str) -> User:
        """
        Get user by email.

        Args:
            email: Email address

        Returns:
            User

        Raises:
            NotFoundError: If no user has this email
        """
        user = await self.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(
        self, email: str, referred_by_code: str | None = None
    ) -> User:
        """
        Create user with a referral code derived from the email.

        The referrer code is stored as given; callers that need it to
        point at an existing user validate it first.

        Args:
            email: Email address
            referred_by_code: Referrer's referral code (optional)

        Returns:
            Created user

        Raises:
            ReferralCodeExhaustedError: If every candidate code is taken
        """
        normalized = normalize_email(email)
        referral_code = await self._allocate_referral_code(normalized)

        user = await self.user_repo.create(
            email=normalized,
            referral_code=referral_code,
            referred_by_code=referred_by_code,
        )

        logger.info(
            "User created",
            extra={
                "user_id": user.id,
                "referral_code": referral_code,
                "referred_by_code": referred_by_code,
            },
        )

        return user

    async def get_or_create(self, email: str) -> User:
        """
        Get user by email, creating one without referrer if absent.

        Args:
            email: Email address

        Returns:
            Existing or new user
        """
        user = await self.find_by_email(email)
        if user is None:
            user = await self.create_user(email)
        return user

    async def register(
        self, email: str, referral_code: str | None = None
    ) -> tuple[User, bool]:
        """
        Register user under an optional referrer.

        An existing user is returned unchanged. An unknown or malformed
        referral code is ignored rather than rejected.

        Args:
            email: Email address
            referral_code: Referrer's referral code (optional)

        Returns:
            Tuple of (user, is_new)
        """
        existing = await self.find_by_email(email)
        if existing is not None:
            return existing, False

        valid_referral_code = None
        if referral_code:
            is_valid, code, _ = validate_referral_code(referral_code)
            if is_valid and await self.find_by_referral_code(code):
                valid_referral_code = code
            else:
                logger.info(
                    "Ignoring unknown referral code on registration",
                    extra={"referral_code": referral_code},
                )

        user = await self.create_user(email, valid_referral_code)
        return user, True

    async def _allocate_referral_code(self, email: str) -> str:
        """
        Pick the first free code among the email's deterministic candidates.

        Args:
            email: Normalized email

        Returns:
            Unused referral code

        Raises:
            ReferralCodeExhaustedError: If all candidates are taken
        """
        for attempt in range(REFERRAL_CODE_MAX_ATTEMPTS):
            code = generate_referral_code(email, attempt)
            if not await self.user_repo.exists(referral_code=code):
                if attempt:
                    logger.warning(
                        "Referral code collision resolved",
                        extra={"attempt": attempt, "referral_code": code},
                    )
                return code

        logger.error(
            "Referral code candidates exhausted",
            extra={"attempts": REFERRAL_CODE_MAX_ATTEMPTS},
        )
        raise ReferralCodeExhaustedError()

"""Account registration, verification, login and password reset.

Passwords are stored as SHA-256 digests. Verification and reset links are
written to the log in place of an email.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import settings
from catalog.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from catalog.logging import get_logger
from catalog.models import User, UserStatus
from catalog.repositories.users import UserRepository
from catalog.security import generate_token, hash_password, verify_password

logger = get_logger(__name__)


async def register(db: AsyncSession, *, name: str, email: str, password: str) -> User:
    """Create a pending account holding a fresh verification token."""
    users = UserRepository(db)
    if await users.get_by_email(email) is not None:
        raise ConflictError("Email is already registered")

    token = generate_token()
    user = await users.add(
        User(
            name=name,
            email=email,
            password=hash_password(password),
            status=UserStatus.PENDING,
            token=token,
        )
    )
    logger.info(
        "user_registered",
        user_id=user.id,
        verify_url=f"{settings.public_base_url}/security/verify/{token}",
    )
    return user


async def verify(db: AsyncSession, token: str) -> User:
    """Activate the pending account owning ``token`` and consume the token."""
    users = UserRepository(db)
    user = await users.get_pending_by_token(token)
    if user is None:
        raise NotFoundError("Verification token", token)
    user.status = UserStatus.ACTIVE
    user.token = ""
    user = await users.update(user)
    logger.info("user_verified", user_id=user.id)
    return user


async def login(db: AsyncSession, *, email: str, password: str) -> User:
    user = await UserRepository(db).get_active_by_email(email)
    if user is None or not verify_password(password, user.password):
        logger.info("login_failed")
        raise InvalidCredentialsError("Invalid credentials")
    logger.info("user_logged_in", user_id=user.id)
    return user


async def request_password_reset(db: AsyncSession, *, email: str) -> None:
    """Issue a reset token for an active account.

    Unknown or unverified addresses are ignored so the response does not
    reveal which emails are registered.
    """
    users = UserRepository(db)
    user = await users.get_active_by_email(email)
    if user is None:
        logger.info("password_reset_ignored")
        return
    user.token = generate_token()
    user = await users.update(user)
    logger.info(
        "password_reset_requested",
        user_id=user.id,
        reset_url=f"{settings.public_base_url}/security/reset/{user.token}",
    )


async def get_reset_user(db: AsyncSession, token: str) -> User:
    user = await UserRepository(db).get_active_by_token(token)
    if user is None:
        raise NotFoundError("Reset token", token)
    return user


async def reset_password(db: AsyncSession, token: str, *, password: str) -> User:
    """Set a new password for the account holding ``token`` and consume the token."""
    user = await get_reset_user(db, token)
    user.password = hash_password(password)
    user.token = ""
    user = await UserRepository(db).update(user)
    logger.info("password_reset", user_id=user.id)
    return user

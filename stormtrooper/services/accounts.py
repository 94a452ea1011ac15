"""Account services: users, external account links and merging.

A user is first created anonymously for a device. Signing in with an
external provider either links that provider account to the current user,
signs the device into the user the provider account already belongs to, or
merges the two users when the device was already signed into another one.
"""

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.auth.security import decrypt, encrypt
from stormtrooper.config import settings
from stormtrooper.middleware.error_handler import (
    ConflictException,
    NotFoundException,
    ServiceUnavailableException,
)
from stormtrooper.models import ExternalAccount, Stream, User
from stormtrooper.schemas.auth import ExternalAuthRequest

logger = logging.getLogger(__name__)

USER_ID_ALPHABET = string.ascii_letters + string.digits


@dataclass
class AuthenticationResult:
    """Outcome of signing in with an external account."""

    user: User
    created: bool = False
    merged: bool = False


# =============================================================================
# Users
# =============================================================================

async def get_user_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
    """Retrieve a user and their external accounts, or None."""
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def generate_user_id(db: AsyncSession) -> str:
    """Draw random ids until an unused one is found.

    Raises:
        ServiceUnavailableException: If no free id turned up within
            ``settings.user_id_max_attempts`` draws.
    """
    for _ in range(settings.user_id_max_attempts):
        candidate = "".join(
            secrets.choice(USER_ID_ALPHABET) for _ in range(settings.user_id_length)
        )
        taken = await db.scalar(select(User.id).where(User.id == candidate))
        if taken is None:
            return candidate
        logger.debug(f"Generated user id {candidate} already taken, retrying")

    logger.error(f"No unused user id after {settings.user_id_max_attempts} attempts")
    raise ServiceUnavailableException(
        message="Unable to allocate a user id",
        service="identity",
    )


async def _upsert_user(db: AsyncSession, user_id: str, device_token: Optional[str]) -> None:
    user = await db.get(User, user_id)
    if user is None:
        db.add(User(id=user_id, device_token=device_token))
    else:
        user.device_token = device_token
    await db.flush()


async def save_user(
    db: AsyncSession,
    user_id: str,
    device_token: Optional[str] = None,
) -> User:
    """Update the user's device token, inserting the user if missing."""
    await _upsert_user(db, user_id, device_token)
    await db.commit()
    return await get_user_by_id(db, user_id)


async def register_user(db: AsyncSession, device_token: Optional[str] = None) -> User:
    """Register a new anonymous user under a freshly generated id."""
    user_id = await generate_user_id(db)
    user = await save_user(db, user_id, device_token)
    logger.info(f"Registered user {user_id}")
    return user


# =============================================================================
# External accounts
# =============================================================================

async def get_user_by_external_account(
    db: AsyncSession,
    provider: str,
    external_id: str,
) -> Optional[User]:
    """Retrieve the user an external account is linked to, or None."""
    result = await db.execute(
        select(User)
        .join(ExternalAccount, ExternalAccount.user_id == User.id)
        .where(
            ExternalAccount.provider == provider,
            ExternalAccount.id == external_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _upsert_external_account(
    db: AsyncSession,
    user_id: str,
    external: ExternalAuthRequest,
) -> None:
    owner_id = await db.scalar(
        select(ExternalAccount.user_id).where(
            ExternalAccount.provider == external.provider,
            ExternalAccount.id == external.id,
        )
    )
    if owner_id is not None and owner_id != user_id:
        raise ConflictException(
            message="External account is already linked to another user",
            conflicting_field="id",
        )

    account = await db.scalar(
        select(ExternalAccount).where(
            ExternalAccount.user_id == user_id,
            ExternalAccount.provider == external.provider,
        )
    )
    if account is None:
        account = ExternalAccount(
            id=external.id,
            provider=external.provider,
            user_id=user_id,
        )
        db.add(account)
    elif account.id != external.id:
        logger.info(
            f"User {user_id} replaced {external.provider} account {account.id} with {external.id}"
        )
        account.id = external.id

    access = encrypt(external.access_token, settings.access_token_key)
    account.access_token = access.cipher
    account.at_iv = access.iv
    account.at_tag = access.tag

    if external.refresh_token:
        refresh = encrypt(external.refresh_token, settings.access_token_key)
        account.refresh_token = refresh.cipher
        account.rt_iv = refresh.iv
        account.rt_tag = refresh.tag
    else:
        account.refresh_token = None
        account.rt_iv = None
        account.rt_tag = None

    await db.flush()


async def save_external_account(
    db: AsyncSession,
    user_id: str,
    external: ExternalAuthRequest,
) -> User:
    """Link an external account to a user, replacing that user's
    previous link for the same provider.

    Raises:
        ConflictException: If the external account belongs to another user.
    """
    await _upsert_external_account(db, user_id, external)
    await db.commit()
    return await get_user_by_id(db, user_id)


def get_external_account_access_token(user: User, provider: str) -> Optional[str]:
    """Decrypt the user's stored access token for a provider.

    Returns:
        The plaintext access token, or None when the user has no
        account linked for that provider.
    """
    account = user.external_account_for(provider)
    if account is None:
        return None
    return decrypt(
        account.access_token,
        settings.access_token_key,
        account.at_iv,
        account.at_tag,
    )


# =============================================================================
# Merging
# =============================================================================

async def _absorb_user(db: AsyncSession, survivor: User, absorbed: User) -> None:
    # Survivor keeps its own link when both users have one for a provider
    survivor_providers = {account.provider for account in survivor.external_accounts}
    if survivor_providers:
        await db.execute(
            delete(ExternalAccount).where(
                ExternalAccount.user_id == absorbed.id,
                ExternalAccount.provider.in_(sorted(survivor_providers)),
            )
        )
    await db.execute(
        update(ExternalAccount)
        .where(ExternalAccount.user_id == absorbed.id)
        .values(user_id=survivor.id)
    )

    survivor_stream = await db.scalar(select(Stream.id).where(Stream.user_id == survivor.id))
    if survivor_stream is None:
        await db.execute(
            update(Stream)
            .where(Stream.user_id == absorbed.id)
            .values(user_id=survivor.id)
        )
    else:
        await db.execute(delete(Stream).where(Stream.user_id == absorbed.id))

    if survivor.device_token is None and absorbed.device_token:
        survivor.device_token = absorbed.device_token
        await db.flush()

    await db.execute(delete(User).where(User.id == absorbed.id))


async def merge_users(db: AsyncSession, survivor_id: str, absorbed_id: str) -> User:
    """Merge ``absorbed_id`` into ``survivor_id`` and delete it.

    External account links and the stream of the absorbed user move to the
    survivor. Everything happens in a single transaction.

    Raises:
        NotFoundException: If the survivor does not exist.
    """
    survivor = await get_user_by_id(db, survivor_id)
    if survivor is None:
        raise NotFoundException(
            message="User not found",
            resource_type="user",
            resource_id=survivor_id,
        )
    if survivor_id == absorbed_id:
        return survivor

    absorbed = await get_user_by_id(db, absorbed_id)
    if absorbed is None:
        logger.warning(f"Merge of {absorbed_id} into {survivor_id} skipped: user already gone")
        return survivor

    await _absorb_user(db, survivor, absorbed)
    await db.commit()
    logger.info(f"Merged user {absorbed_id} into {survivor_id}")
    return await get_user_by_id(db, survivor_id)


# =============================================================================
# External authentication
# =============================================================================

async def process_external_authentication(
    db: AsyncSession,
    current_user: Optional[User],
    external: ExternalAuthRequest,
) -> AuthenticationResult:
    """Sign a device in with an external account.

    Args:
        db: Database session.
        current_user: User the request is already authenticated as, if any.
        external: External account and its tokens.

    Returns:
        AuthenticationResult with the user the device is now signed into.
    """
    linked = await get_user_by_external_account(db, external.provider, external.id)

    if linked is not None:
        absorbed_id = None
        if current_user is not None and current_user.id != linked.id:
            absorbed_id = current_user.id
            await _absorb_user(db, linked, current_user)
        await _upsert_external_account(db, linked.id, external)
        await db.commit()
        if absorbed_id is not None:
            logger.info(f"Merged user {absorbed_id} into {linked.id}")
        return AuthenticationResult(
            user=await get_user_by_id(db, linked.id),
            merged=absorbed_id is not None,
        )

    if current_user is not None:
        user = await save_external_account(db, current_user.id, external)
        logger.info(f"Linked {external.provider} account {external.id} to user {user.id}")
        return AuthenticationResult(user=user)

    user_id = await generate_user_id(db)
    await _upsert_user(db, user_id, None)
    await _upsert_external_account(db, user_id, external)
    await db.commit()
    logger.info(f"Registered user {user_id} from {external.provider} account {external.id}")
    return AuthenticationResult(user=await get_user_by_id(db, user_id), created=True)

"""User-record access service.

Coordinates the identifier validator, the cache, the primary store, the
password hasher and the session invalidator for every user-record
request. Reads are cache-aside; writes go to the primary store first and
then refresh or evict the cache, so a crash between the two steps leaves
the cache missing rather than holding data the store never accepted.

Callers may only read, update or delete their own record. Anticipated
conditions (not found, forbidden, conflict, malformed id) come back as
ResultEnvelope values; unexpected collaborator failures are logged and
re-raised as UserStoreException.
"""

from __future__ import annotations

import asyncio
import logging

from useraccounts.application.dtos.result import ResultEnvelope
from useraccounts.application.dtos.user import NewUser, UserUpdate, UserView
from useraccounts.application.interfaces.repositories import IUserRepository
from useraccounts.application.interfaces.services import (
    IPasswordHasher,
    ISessionInvalidator,
    IUserCache,
)
from useraccounts.application.services import response_shaper as shaper
from useraccounts.application.services.identifier_validator import is_valid_user_id
from useraccounts.domain.entities.user import UserRecord
from useraccounts.domain.exceptions import (
    DuplicateUsernameException,
    UserStoreException,
)

logger = logging.getLogger(__name__)

CALLER_NOT_FOUND_MESSAGE = "Cannot find the user"
LIST_FAILED_MESSAGE = "An error occurred while retrieving all users"


class UserAccessService:
    """Cache-aside reads and owner-only writes over the user stores.

    Holds no mutable state of its own; build one per request with the
    caller's session invalidator.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        cache: IUserCache,
        password_hasher: IPasswordHasher,
        session_invalidator: ISessionInvalidator | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._cache = cache
        self._hasher = password_hasher
        self._session_invalidator = session_invalidator

    async def list_all(self) -> ResultEnvelope:
        """Return views of every stored user; internal-error if the store fails."""
        logger.info("Listing all users")
        try:
            records = await self._user_repo.find_all()
        except Exception:
            logger.exception(LIST_FAILED_MESSAGE)
            return shaper.internal_error(LIST_FAILED_MESSAGE)
        return shaper.ok([UserView.from_record(r) for r in records])

    async def get_by_id(self, user_id: str, caller: str) -> ResultEnvelope:
        """Return the caller's own record by id.

        A cache hit is authoritative for the read; the cached record must
        carry the requested id. On a miss the id is validated, the caller
        and the target are loaded from the primary store, ownership is
        checked and the cache is populated.
        """
        try:
            if await self._is_cached(user_id):
                return await self._get_from_cache(user_id)

            logger.debug("Cache miss for user %s; reading primary store", user_id)
            if not is_valid_user_id(user_id):
                return self._invalid_id(user_id)
            owner = await self._user_repo.find_by_username(caller)
            if owner is None:
                return shaper.not_found(CALLER_NOT_FOUND_MESSAGE)
            record = await self._user_repo.find_by_id(user_id)
            if record is None:
                return self._user_not_found(user_id)
            denied = self._check_ownership(owner, user_id)
            if denied is not None:
                return denied
            await self._cache.set(user_id, record)
            return shaper.ok(UserView.from_record(record))
        except Exception as e:
            raise self._store_failure("get_by_id", e) from e

    async def add_user(self, new_user: NewUser) -> ResultEnvelope:
        """Register a user; conflict when the username is already taken."""
        logger.info("Adding user %s", new_user.username)
        try:
            if await self._user_repo.find_by_username(new_user.username) is not None:
                return self._username_taken(new_user.username)
            password_hash = await asyncio.to_thread(self._hasher.hash, new_user.password)
            record = UserRecord(
                id=None,
                username=new_user.username,
                password_hash=password_hash,
            )
            try:
                record = await self._user_repo.save(record)
            except DuplicateUsernameException:
                return self._username_taken(new_user.username)
            await self._cache.set(record.id, record)
            message = f"User has been added with id {record.id}"
            logger.info(message)
            return shaper.ok_message(message)
        except Exception as e:
            raise self._store_failure("add_user", e) from e

    async def update_by_id(self, update: UserUpdate, caller: str) -> ResultEnvelope:
        """Replace username and password of the caller's own record.

        On success the cache entry is refreshed and the caller's session
        is invalidated so the new credentials must be used to log in.
        """
        if not update.id:
            return shaper.bad_input(f"Invalid user id : {update.id}")
        try:
            resolved = await self._resolve_owner(caller, update.id)
            if isinstance(resolved, ResultEnvelope):
                return resolved
            record = await self._user_repo.find_by_id(update.id)
            if record is None:
                return self._user_not_found(update.id)
            holder = await self._user_repo.find_by_username(update.username)
            if holder is not None and holder.id != record.id:
                return self._username_taken(update.username)

            record.rename(update.username)
            record.change_password_hash(
                await asyncio.to_thread(self._hasher.hash, update.password)
            )
            try:
                record = await self._user_repo.save(record)
            except DuplicateUsernameException:
                return self._username_taken(update.username)
            await self._cache.set(record.id, record)
            await self._invalidate_session()
            logger.info("User %s updated; session invalidated", record.id)
            return shaper.ok(UserView.from_record(record))
        except Exception as e:
            raise self._store_failure("update_by_id", e) from e

    async def delete_by_id(self, user_id: str, caller: str) -> ResultEnvelope:
        """Delete the caller's own record from the store, then from the cache.

        Deletion is idempotent at the store: a record that is already gone
        is not reported as an error.
        """
        if not user_id:
            return shaper.bad_input(f"Invalid user id : {user_id}")
        try:
            resolved = await self._resolve_owner(caller, user_id)
            if isinstance(resolved, ResultEnvelope):
                return resolved
            await self._user_repo.delete_by_id(user_id)
            if await self._is_cached(user_id):
                await self._cache.delete(user_id)
            await self._invalidate_session()
            message = f"User details have been deleted with user-id {user_id}"
            logger.info(message)
            return shaper.ok_message(message)
        except Exception as e:
            raise self._store_failure("delete_by_id", e) from e

    # ---- helpers ----

    async def _is_cached(self, user_id: str) -> bool:
        return bool(await self._cache.keys_matching(user_id))

    async def _get_from_cache(self, user_id: str) -> ResultEnvelope:
        logger.debug("Serving user %s from cache", user_id)
        record = await self._cache.get(user_id)
        if record is None:
            # Evicted or expired between the existence check and the read.
            return shaper.not_found(CALLER_NOT_FOUND_MESSAGE)
        if record.id != user_id:
            return self._permission_denied(user_id)
        return shaper.ok(UserView.from_record(record))

    async def _resolve_owner(
        self, caller: str, target_id: str
    ) -> UserRecord | ResultEnvelope:
        """Load the caller's record, validate target_id and require they match.

        Returns:
            The caller's record, or the failure envelope (not-found,
            bad-input or forbidden) to answer with.
        """
        owner = await self._user_repo.find_by_username(caller)
        if owner is None:
            return shaper.not_found(CALLER_NOT_FOUND_MESSAGE)
        if not is_valid_user_id(target_id):
            return self._invalid_id(target_id)
        denied = self._check_ownership(owner, target_id)
        if denied is not None:
            return denied
        return owner

    def _check_ownership(
        self, owner: UserRecord, target_id: str
    ) -> ResultEnvelope | None:
        if owner.id != target_id:
            return self._permission_denied(target_id)
        return None

    async def _invalidate_session(self) -> None:
        if self._session_invalidator is not None:
            await self._session_invalidator.invalidate()

    @staticmethod
    def _invalid_id(user_id: str) -> ResultEnvelope:
        logger.warning("Invalid ObjectId string provided: %s", user_id)
        return shaper.bad_input(f"Invalid ObjectId string provided: {user_id}")

    @staticmethod
    def _permission_denied(user_id: str) -> ResultEnvelope:
        logger.warning("Permission denied for user ID %s", user_id)
        return shaper.forbidden(f"Permission denied for user ID : {user_id}")

    @staticmethod
    def _user_not_found(user_id: str) -> ResultEnvelope:
        return shaper.not_found(f"Failed to find the user with ID : {user_id}")

    @staticmethod
    def _username_taken(username: str) -> ResultEnvelope:
        return shaper.conflict(
            f"User is already registered with this username: {username}"
        )

    @staticmethod
    def _store_failure(operation: str, error: Exception) -> UserStoreException:
        logger.exception("Store failure during %s", operation)
        return UserStoreException(operation, error)

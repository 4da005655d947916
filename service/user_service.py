# service/user_service.py
import json
import logging
from typing import Any, List
from core.object_store import ObjectNotFoundError, StoreError
from model.api import SaveUserRequest, SuccessResponse
from model.transaction import validate_namespace
from repository.user_index_repository import UserIndexCorruptError, UserIndexRepository
from repository.user_repository import UserRepository
from util.enums import ErrorMessage
from util.errors import (
    InvalidArgumentError,
    NotFoundError,
    ParseError,
    StoreFailureError,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, user_index: UserIndexRepository) -> None:
        self._users = users
        self._user_index = user_index

    @staticmethod
    def _username(username: str) -> str:
        try:
            return validate_namespace(username)
        except InvalidArgumentError:
            raise InvalidArgumentError.of(ErrorMessage.INVALID_USERNAME)

    async def _refresh_index(self) -> None:
        try:
            await self._user_index.rebuild()
        except StoreError as e:
            logger.warning("user.index.stale err=%s", e)

    async def list_users(self) -> List[str]:
        """Serve user.json, building it on first use."""
        try:
            return await self._user_index.load()
        except ObjectNotFoundError:
            logger.info("user.index.missing rebuilding")
        except UserIndexCorruptError as e:
            logger.error("user.index.corrupt err=%s", e)
            raise ParseError.of(ErrorMessage.USER_INDEX_CORRUPT)
        except StoreError as e:
            logger.error("user.index.read.error err=%s", e)
            raise StoreFailureError.of(ErrorMessage.USER_INDEX_FAILED)

        try:
            return await self._user_index.rebuild()
        except StoreError as e:
            logger.error("user.index.rebuild.error err=%s", e)
            raise StoreFailureError.of(ErrorMessage.USER_INDEX_FAILED)

    async def get_user(self, username: str) -> Any:
        name = self._username(username)
        try:
            return await self._users.get(name)
        except ObjectNotFoundError:
            raise NotFoundError.of(ErrorMessage.USER_NOT_FOUND)
        except json.JSONDecodeError:
            logger.error("user.corrupt user=%s", name)
            raise ParseError.of(ErrorMessage.USER_CORRUPT)
        except StoreError as e:
            logger.error("user.read.error user=%s err=%s", name, e)
            raise StoreFailureError.of(ErrorMessage.USER_READ_FAILED)

    async def save_user(self, req: SaveUserRequest) -> SuccessResponse:
        """
        Write the profile, then (optionally) the credential artifact.
        A credential write failure is only a warning; the profile is saved.
        """
        name = self._username(req.username)
        try:
            await self._users.put(name, req.data)
        except StoreError as e:
            logger.error("user.save.error user=%s err=%s", name, e)
            raise StoreFailureError.of(ErrorMessage.USER_SAVE_FAILED)

        if req.updatePassword and req.encryptedPassword:
            try:
                await self._users.put_credential(name, req.encryptedPassword)
            except StoreError as e:
                logger.warning("user.credential.save.error user=%s err=%s", name, e)

        await self._refresh_index()
        logger.info("user.save.ok user=%s new=%s", name, req.isNew)
        return SuccessResponse()

    async def delete_user(self, username: str) -> SuccessResponse:
        name = self._username(username)
        failures = [f for f in await self._users.delete(name) if f is not None]
        if failures:
            for f in failures:
                logger.error("user.delete.error user=%s err=%s", name, f)
            raise StoreFailureError.of(ErrorMessage.USER_DELETE_FAILED)

        await self._refresh_index()
        logger.info("user.delete.ok user=%s", name)
        return SuccessResponse()

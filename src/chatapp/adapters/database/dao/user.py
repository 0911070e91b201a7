from abc import ABC, abstractmethod
import logging

from sqlalchemy import select, insert, update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatapp.adapters.database.dto import UserDTO
from chatapp.adapters.database.structures import User
from chatapp.exceptions import InfrastructureError

class AbstractUserDAO(ABC):
    @abstractmethod
    async def user_exists(self, user_id: str) -> bool:
        raise NotImplementedError()

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> UserDTO | None:
        raise NotImplementedError()

    @abstractmethod
    async def get_user_by_connection_id(self, connection_id: str) -> UserDTO | None:
        raise NotImplementedError()

class UserDAO(AbstractUserDAO):
    __slots__ = ("_session", "_logger")

    def __init__(self, session: AsyncSession, logger: logging.Logger | None = None):
        self._session = session
        self._logger = logger or logging.getLogger(__name__)

    async def add_user(self, user: UserDTO) -> UserDTO:
        try:
            stmt = (
                insert(User)
                .values(**user.model_dump())
                .returning(User)
            )
            result = await self._session.scalar(stmt)
            user_dto = UserDTO.model_validate(result, from_attributes=True)
            await self._session.commit()

            return user_dto

        except SQLAlchemyError as e:
            self._logger.error(f"Error adding user in database: {e}")
            await self._session.rollback()
            raise InfrastructureError("Error adding user", original_error=e) from e

    async def user_exists(self, user_id: str) -> bool:
        try:
            stmt = select(func.count()).select_from(User).where(User.user_id == user_id)
            return bool(await self._session.scalar(stmt))

        except SQLAlchemyError as e:
            self._logger.error(f"Error checking user in database: {e}")
            raise InfrastructureError("Error checking user", original_error=e) from e

    async def get_user_by_id(self, user_id: str) -> UserDTO | None:
        try:
            result = await self._session.scalar(select(User).where(User.user_id == user_id))
            if not result:
                return None

            return UserDTO.model_validate(result, from_attributes=True)

        except SQLAlchemyError as e:
            self._logger.error(f"Error fetching user in database: {e}")
            raise InfrastructureError("Error fetching user", original_error=e) from e

    async def get_user_by_connection_id(self, connection_id: str) -> UserDTO | None:
        try:
            result = await self._session.scalar(select(User).where(User.connection_id == connection_id))
            if not result:
                return None

            return UserDTO.model_validate(result, from_attributes=True)

        except SQLAlchemyError as e:
            self._logger.error(f"Error fetching user by connection in database: {e}")
            raise InfrastructureError("Error fetching user by connection", original_error=e) from e

    async def set_connection_id(self, user_id: str, connection_id: str | None) -> UserDTO | None:
        """
        Binds (or with None, unbinds) an active realtime connection to the user
        """
        try:
            stmt = (
                update(User)
                .where(User.user_id == user_id)
                .values(connection_id=connection_id)
                .returning(User)
            )
            result = await self._session.scalar(stmt)
            user_dto = UserDTO.model_validate(result, from_attributes=True) if result else None
            await self._session.commit()

            return user_dto

        except SQLAlchemyError as e:
            self._logger.error(f"Error updating user connection in database: {e}")
            await self._session.rollback()
            raise InfrastructureError("Error updating user connection", original_error=e) from e

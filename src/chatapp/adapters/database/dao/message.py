from abc import ABC, abstractmethod
import logging

from sqlalchemy import select, delete, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatapp.adapters.api.dao.cloudinary import CloudinaryHTTPDAO
from chatapp.adapters.database.dto import MessageDTO, ImageFileDTO, ImageUploadResultDTO
from chatapp.adapters.database.structures import Message
from chatapp.exceptions import InfrastructureError

class AbstractMessageDAO(ABC):
    @abstractmethod
    async def save_message(self, message: MessageDTO) -> MessageDTO:
        raise NotImplementedError()

    @abstractmethod
    async def get_message_by_id(self, message_id: str) -> MessageDTO | None:
        raise NotImplementedError()

    @abstractmethod
    async def remove_message_by_id(self, message_id: str) -> None:
        raise NotImplementedError()

    @abstractmethod
    async def get_all_room_messages(self, room_id: str) -> list[MessageDTO]:
        raise NotImplementedError()

    @abstractmethod
    async def upload_image(self, image: ImageFileDTO) -> ImageUploadResultDTO | None:
        raise NotImplementedError()

class MessageDAO(AbstractMessageDAO):
    __slots__ = ("_session", "_image_storage", "_logger")

    def __init__(
            self,
            session: AsyncSession,
            image_storage: CloudinaryHTTPDAO,
            logger: logging.Logger | None = None
    ):
        self._session = session
        self._image_storage = image_storage
        self._logger = logger or logging.getLogger(__name__)

    async def save_message(self, message: MessageDTO) -> MessageDTO:
        try:
            stmt = (
                insert(Message)
                .values(**message.model_dump())
                .returning(Message)
            )
            result = await self._session.scalar(stmt)
            message_dto = MessageDTO.model_validate(result, from_attributes=True)
            await self._session.commit()

            return message_dto

        except SQLAlchemyError as e:
            self._logger.error(f"Error adding message in database: {e}")
            await self._session.rollback()
            raise InfrastructureError("Error adding message", original_error=e) from e

    async def get_message_by_id(self, message_id: str) -> MessageDTO | None:
        try:
            result = await self._session.scalar(select(Message).where(Message.message_id == message_id))
            if not result:
                return None

            return MessageDTO.model_validate(result, from_attributes=True)

        except SQLAlchemyError as e:
            self._logger.error(f"Error fetching message in database: {e}")
            raise InfrastructureError("Error fetching message", original_error=e) from e

    async def remove_message_by_id(self, message_id: str) -> None:
        try:
            await self._session.execute(delete(Message).where(Message.message_id == message_id))
            await self._session.commit()

        except SQLAlchemyError as e:
            self._logger.error(f"Error deleting message in database: {e}")
            await self._session.rollback()
            raise InfrastructureError("Error deleting message", original_error=e) from e

    async def get_all_room_messages(self, room_id: str) -> list[MessageDTO]:
        try:
            stmt = (
                select(Message)
                .where(Message.room_id == room_id)
                .order_by(Message.date.asc())
            )
            result = await self._session.scalars(stmt)

            return [MessageDTO.model_validate(message, from_attributes=True) for message in result]

        except SQLAlchemyError as e:
            self._logger.error(f"Error fetching room messages in database: {e}")
            raise InfrastructureError("Error fetching room messages", original_error=e) from e

    async def upload_image(self, image: ImageFileDTO) -> ImageUploadResultDTO | None:
        return await self._image_storage.upload_image(image)

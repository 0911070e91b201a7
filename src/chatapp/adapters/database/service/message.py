from datetime import datetime, timezone
import logging
import uuid

from ..dao.message import AbstractMessageDAO
from ..dao.user import AbstractUserDAO
from chatapp.adapters.database.dto import (
    MessageDTO,
    MessageResponseDTO,
    SaveMessageRequestDTO,
    SaveImageRequestDTO,
    RemoveMessageRequestDTO,
    ImageFileDTO,
    ImageUploadResultDTO,
    ValidationFailureDTO,
)
from chatapp.adapters.validation import AbstractValidator
from chatapp.core.errors import Error, ErrorOr, Deleted, DELETED, UserErrors, MessageErrors
from chatapp.exceptions import SenderNotResolvedError

class MessageService:
    def __init__(
            self,
            message_dao: AbstractMessageDAO,
            user_dao: AbstractUserDAO,
            text_message_validator: AbstractValidator[SaveMessageRequestDTO],
            image_message_validator: AbstractValidator[SaveImageRequestDTO],
            logger: logging.Logger | None = None
    ):
        self._message_dao = message_dao
        self._user_dao = user_dao
        self._text_message_validator = text_message_validator
        self._image_message_validator = image_message_validator
        self._logger = logger or logging.getLogger(__name__)

    async def save_message(self, request: SaveMessageRequestDTO) -> ErrorOr[MessageResponseDTO]:
        if not await self._user_dao.user_exists(request.user_id):
            return ErrorOr.fail(UserErrors.USER_NOT_FOUND)

        failures = await self._text_message_validator.validate(request)
        if failures:
            return ErrorOr.fail(*self._convert_validation_failures(failures))

        message = await self._message_dao.save_message(MessageDTO(
            message_id=str(uuid.uuid4()),
            room_id=request.room_id,
            user_id=request.user_id,
            text=request.text,
            date=datetime.now(timezone.utc),
            from_user=request.from_user,
            is_image=False,
            image_url=""
        ))
        self._logger.info(f"Message {message.message_id} saved in room {message.room_id}")

        return ErrorOr.ok(await self._map_message_response(message))

    async def remove_message(self, request: RemoveMessageRequestDTO) -> ErrorOr[Deleted]:
        message = await self._message_dao.get_message_by_id(request.message_id)
        if message is None:
            return ErrorOr.fail(MessageErrors.MESSAGE_NOT_FOUND)

        user = await self._user_dao.get_user_by_connection_id(request.connection_id)
        if user is None:
            return ErrorOr.fail(UserErrors.USER_NOT_FOUND)

        if user.user_id != message.user_id:
            self._logger.warning(
                f"User {user.user_id} is not allowed to remove message {message.message_id}"
            )
            return ErrorOr.fail(MessageErrors.MESSAGE_IS_NOT_REMOVED)

        await self._message_dao.remove_message_by_id(message.message_id)
        self._logger.info(f"Message {message.message_id} removed from room {message.room_id}")

        return ErrorOr.ok(DELETED)

    async def save_image(self, request: SaveImageRequestDTO) -> ErrorOr[MessageResponseDTO]:
        if not await self._user_dao.user_exists(request.user_id):
            return ErrorOr.fail(UserErrors.USER_NOT_FOUND)

        failures = await self._image_message_validator.validate(request)
        if failures:
            return ErrorOr.fail(*self._convert_validation_failures(failures))

        message = await self._message_dao.save_message(MessageDTO(
            message_id=str(uuid.uuid4()),
            room_id=request.room_id,
            user_id=request.user_id,
            text="",
            date=datetime.now(timezone.utc),
            from_user=True,
            is_image=True,
            image_url=request.image_url
        ))
        self._logger.info(f"Image message {message.message_id} saved in room {message.room_id}")

        return ErrorOr.ok(await self._map_message_response(message))

    async def upload_image(self, image: ImageFileDTO) -> ErrorOr[ImageUploadResultDTO]:
        """
        Uploads the image to the image storage. Saving the message that references
        the returned url is a separate call to save_image
        """
        if image.length <= 0:
            return ErrorOr.fail(MessageErrors.IMAGE_FILE_IS_CORRUPTED)

        upload_result = await self._message_dao.upload_image(image)
        if upload_result is None:
            self._logger.warning(f"Image {image.filename} could not be uploaded")
            return ErrorOr.fail(MessageErrors.CANT_UPLOAD_IMAGE)

        return ErrorOr.ok(upload_result)

    async def get_all_room_messages(self, room_id: str) -> list[MessageResponseDTO]:
        messages = await self._message_dao.get_all_room_messages(room_id)

        # one sender lookup per message, sequentially
        return [await self._map_message_response(message) for message in messages]

    async def _map_message_response(self, message: MessageDTO) -> MessageResponseDTO:
        user = await self._user_dao.get_user_by_id(message.user_id)
        if user is None:
            raise SenderNotResolvedError(message.user_id, message.message_id)

        return MessageResponseDTO(
            message_id=message.message_id,
            username=user.username,
            user_id=message.user_id,
            room_id=message.room_id,
            text=message.text,
            date=message.date,
            from_user=message.from_user,
            is_image=message.is_image,
            image_url=message.image_url
        )

    @staticmethod
    def _convert_validation_failures(failures: list[ValidationFailureDTO]) -> list[Error]:
        return [
            Error.validation(failure.property_name, failure.error_message)
            for failure in failures
        ]

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
import logging

from pydantic import HttpUrl, TypeAdapter, ValidationError

from chatapp.adapters.database.dto import (
    SaveMessageRequestDTO,
    SaveImageRequestDTO,
    ValidationFailureDTO,
)

T = TypeVar("T")

_http_url = TypeAdapter(HttpUrl)


class AbstractValidator(ABC, Generic[T]):
    @abstractmethod
    async def validate(self, request: T) -> list[ValidationFailureDTO]:
        """
        Runs every rule for the request
        :param request: Request to validate
        :return: All failures, empty list if the request is valid
        """
        raise NotImplementedError()


def _not_empty(failures: list[ValidationFailureDTO], name: str, value: str | None):
    if value is None or not value.strip():
        failures.append(ValidationFailureDTO(
            property_name=name,
            error_message=f"'{name}' must not be empty."
        ))


class SaveMessageRequestValidator(AbstractValidator[SaveMessageRequestDTO]):
    __slots__ = ("_max_text_length", "_logger")

    def __init__(self, max_text_length: int = 1000, logger: logging.Logger | None = None):
        self._max_text_length = max_text_length
        self._logger = logger or logging.getLogger(__name__)

    async def validate(self, request: SaveMessageRequestDTO) -> list[ValidationFailureDTO]:
        failures: list[ValidationFailureDTO] = []

        _not_empty(failures, "user_id", request.user_id)
        _not_empty(failures, "room_id", request.room_id)
        _not_empty(failures, "text", request.text)

        if len(request.text) > self._max_text_length:
            failures.append(ValidationFailureDTO(
                property_name="text",
                error_message=f"'text' must be {self._max_text_length} characters or fewer. "
                              f"You entered {len(request.text)} characters."
            ))

        if failures:
            self._logger.debug(f"Text message rejected: {[f.property_name for f in failures]}")
        return failures


class SaveImageRequestValidator(AbstractValidator[SaveImageRequestDTO]):
    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(__name__)

    async def validate(self, request: SaveImageRequestDTO) -> list[ValidationFailureDTO]:
        failures: list[ValidationFailureDTO] = []

        _not_empty(failures, "user_id", request.user_id)
        _not_empty(failures, "room_id", request.room_id)
        _not_empty(failures, "image_url", request.image_url)

        if request.image_url.strip():
            try:
                _http_url.validate_python(request.image_url)
            except ValidationError:
                failures.append(ValidationFailureDTO(
                    property_name="image_url",
                    error_message="'image_url' must be an absolute http(s) URL."
                ))

        if failures:
            self._logger.debug(f"Image message rejected: {[f.property_name for f in failures]}")
        return failures

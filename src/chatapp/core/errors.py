from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ErrorType(str, Enum):
    FAILURE = "failure"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class Error(BaseModel):
    """
    Expected business error returned to the caller instead of being raised
    """
    model_config = ConfigDict(frozen=True)

    code: str
    description: str
    type: ErrorType = ErrorType.FAILURE

    @classmethod
    def failure(cls, code: str, description: str) -> "Error":
        return cls(code=code, description=description, type=ErrorType.FAILURE)

    @classmethod
    def validation(cls, code: str, description: str) -> "Error":
        return cls(code=code, description=description, type=ErrorType.VALIDATION)

    @classmethod
    def not_found(cls, code: str, description: str) -> "Error":
        return cls(code=code, description=description, type=ErrorType.NOT_FOUND)

    @classmethod
    def forbidden(cls, code: str, description: str) -> "Error":
        return cls(code=code, description=description, type=ErrorType.FORBIDDEN)


class Deleted:
    """
    Marker for a successful deletion, carries no body
    """
    __slots__ = ()

    def __repr__(self) -> str:
        return "Deleted"


DELETED = Deleted()


@dataclass(frozen=True, slots=True)
class ErrorOr(Generic[T]):
    """
    Either a value or one-or-many errors
    """
    value: T | None = None
    errors: tuple[Error, ...] = ()

    @classmethod
    def ok(cls, value: T) -> "ErrorOr[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, *errors: Error) -> "ErrorOr[T]":
        if not errors:
            raise ValueError("At least one error is required")
        return cls(errors=tuple(errors))

    @property
    def is_error(self) -> bool:
        return bool(self.errors)

    @property
    def first_error(self) -> Error | None:
        return self.errors[0] if self.errors else None


class UserErrors:
    USER_NOT_FOUND = Error.not_found("User.NotFound", "User not found.")


class MessageErrors:
    MESSAGE_NOT_FOUND = Error.not_found("Message.NotFound", "Message not found.")
    MESSAGE_IS_NOT_REMOVED = Error.forbidden(
        "Message.IsNotRemoved", "Message can be removed only by its sender."
    )
    IMAGE_FILE_IS_CORRUPTED = Error.validation(
        "Message.ImageFileIsCorrupted", "Image file is empty or corrupted."
    )
    CANT_UPLOAD_IMAGE = Error.failure(
        "Message.CantUploadImage", "Image could not be uploaded to the image storage."
    )

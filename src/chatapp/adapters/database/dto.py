from pydantic import BaseModel, ConfigDict
from datetime import datetime

class UserDTO(BaseModel):
    user_id: str
    username: str
    connection_id: str | None = None

class MessageDTO(BaseModel):
    message_id: str
    room_id: str
    user_id: str
    text: str = ""  # empty for images
    date: datetime
    from_user: bool  # True - sent by user, False - system
    is_image: bool = False
    image_url: str = ""  # empty for text

class MessageResponseDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_id: str
    username: str
    user_id: str
    room_id: str
    text: str
    date: datetime
    from_user: bool
    is_image: bool
    image_url: str

class SaveMessageRequestDTO(BaseModel):
    user_id: str
    room_id: str
    text: str
    from_user: bool = True

class SaveImageRequestDTO(BaseModel):
    user_id: str
    room_id: str
    image_url: str

class RemoveMessageRequestDTO(BaseModel):
    message_id: str
    connection_id: str

class ImageFileDTO(BaseModel):
    filename: str
    content_type: str | None = None
    content: bytes

    @property
    def length(self) -> int:
        return len(self.content)

class ImageUploadResultDTO(BaseModel):
    public_id: str | None = None
    url: str
    secure_url: str | None = None
    format: str | None = None
    width: int | None = None
    height: int | None = None
    size: int | None = None  # bytes
    created_at: datetime | None = None

class ValidationFailureDTO(BaseModel):
    property_name: str
    error_message: str

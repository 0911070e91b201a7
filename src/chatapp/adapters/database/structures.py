from sqlalchemy import ForeignKey, String, Text, DateTime, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator
from datetime import datetime, timezone
from typing import Optional

class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime on every backend (SQLite stores naive values)
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetime can't be stored, attach a timezone first")
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

class Base(DeclarativeBase):
    pass

class User(Base):
    __tablename__ = "users"

    __table_args__ = (
        Index('ix_users_username', 'username', unique=True),
        Index('ix_users_connection_id', 'connection_id', unique=True),
    )

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    username: Mapped[str] = mapped_column(String(50))
    connection_id: Mapped[Optional[str]] = mapped_column(String(100))  # active realtime session

class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (
        Index('ix_messages_room_date', 'room_id', 'date'),
        Index('ix_messages_user_id', 'user_id'),
    )

    message_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    room_id: Mapped[str] = mapped_column(String(100))
    user_id: Mapped[str] = mapped_column(ForeignKey("users.user_id"))
    text: Mapped[str] = mapped_column(Text, default="")  # empty for images
    date: Mapped[datetime] = mapped_column(UTCDateTime(), default=lambda: datetime.now(timezone.utc))
    from_user: Mapped[bool] = mapped_column(default=True)  # False - system message
    is_image: Mapped[bool] = mapped_column(default=False)
    image_url: Mapped[str] = mapped_column(Text, default="")  # empty for text

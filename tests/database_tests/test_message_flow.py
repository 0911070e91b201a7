import pytest
from datetime import timedelta
from dishka import make_async_container

from chatapp.config import Config
from chatapp.providers import AppProvider
from chatapp.adapters.database.dao import UserDAO
from chatapp.adapters.database.dto import (
    UserDTO,
    SaveMessageRequestDTO,
    SaveImageRequestDTO,
    RemoveMessageRequestDTO,
)
from chatapp.adapters.database.service import MessageService
from chatapp.core.errors import DELETED, MessageErrors


async def seed_users(request_container):
    user_dao = await request_container.get(UserDAO)
    await user_dao.add_user(UserDTO(user_id="u1", username="alice", connection_id="c1"))
    await user_dao.add_user(UserDTO(user_id="u2", username="bob", connection_id="c2"))


@pytest.mark.asyncio
async def test_chat_flow(config):
    container = make_async_container(AppProvider(), context={Config: config})

    try:
        async with container() as request_container:
            await seed_users(request_container)
            service = await request_container.get(MessageService)

            text = await service.save_message(
                SaveMessageRequestDTO(user_id="u1", room_id="r1", text="hi", from_user=True)
            )
            assert not text.is_error
            assert text.value.username == "alice"
            assert text.value.date.tzinfo is not None

            image = await service.save_image(
                SaveImageRequestDTO(user_id="u2", room_id="r1", image_url="https://res.test/cat.png")
            )
            assert not image.is_error
            assert image.value.is_image is True

            history = await service.get_all_room_messages("r1")
            assert all(m.date.utcoffset() == timedelta(0) for m in history)
            assert [(m.username, m.text, m.image_url) for m in history] == [
                ("alice", "hi", ""),
                ("bob", "", "https://res.test/cat.png"),
            ]

            denied = await service.remove_message(
                RemoveMessageRequestDTO(message_id=text.value.message_id, connection_id="c2")
            )
            assert denied.first_error == MessageErrors.MESSAGE_IS_NOT_REMOVED
            assert len(await service.get_all_room_messages("r1")) == 2

            removed = await service.remove_message(
                RemoveMessageRequestDTO(message_id=text.value.message_id, connection_id="c1")
            )
            assert removed.value is DELETED
            assert [m.message_id for m in await service.get_all_room_messages("r1")] == [
                image.value.message_id
            ]
    finally:
        await container.close()


@pytest.mark.asyncio
async def test_invalid_requests_are_not_persisted(config):
    container = make_async_container(AppProvider(), context={Config: config})

    try:
        async with container() as request_container:
            await seed_users(request_container)
            service = await request_container.get(MessageService)

            text = await service.save_message(SaveMessageRequestDTO(user_id="u1", room_id=" ", text=""))
            assert {e.code for e in text.errors} == {"room_id", "text"}

            image = await service.save_image(SaveImageRequestDTO(user_id="u1", room_id="r1", image_url="cat.png"))
            assert [e.code for e in image.errors] == ["image_url"]

            assert await service.get_all_room_messages("r1") == []
            assert await service.get_all_room_messages(" ") == []
    finally:
        await container.close()

import pytest

from chatapp.adapters.database.dto import SaveMessageRequestDTO, SaveImageRequestDTO
from chatapp.adapters.validation import SaveMessageRequestValidator, SaveImageRequestValidator


@pytest.mark.asyncio
async def test_valid_text_message():
    validator = SaveMessageRequestValidator(max_text_length=10)

    failures = await validator.validate(SaveMessageRequestDTO(user_id="u1", room_id="r1", text="hi"))

    assert failures == []


@pytest.mark.asyncio
async def test_text_message_collects_all_failures():
    validator = SaveMessageRequestValidator()

    failures = await validator.validate(SaveMessageRequestDTO(user_id="", room_id="  ", text=""))

    assert [f.property_name for f in failures] == ["user_id", "room_id", "text"]
    assert failures[2].error_message == "'text' must not be empty."


@pytest.mark.asyncio
async def test_text_message_too_long():
    validator = SaveMessageRequestValidator(max_text_length=5)

    failures = await validator.validate(SaveMessageRequestDTO(user_id="u1", room_id="r1", text="abcdef"))

    assert len(failures) == 1
    assert failures[0].property_name == "text"
    assert "5 characters or fewer" in failures[0].error_message


@pytest.mark.asyncio
async def test_valid_image_message():
    validator = SaveImageRequestValidator()

    failures = await validator.validate(
        SaveImageRequestDTO(user_id="u1", room_id="r1", image_url="https://res.cloudinary.com/demo/image/upload/cat.png")
    )

    assert failures == []


@pytest.mark.asyncio
@pytest.mark.parametrize("image_url", ["cat.png", "ftp://files.test/cat.png", "https://"])
async def test_image_url_must_be_http(image_url):
    validator = SaveImageRequestValidator()

    failures = await validator.validate(SaveImageRequestDTO(user_id="u1", room_id="r1", image_url=image_url))

    assert [f.property_name for f in failures] == ["image_url"]


@pytest.mark.asyncio
async def test_empty_image_url_reported_once():
    validator = SaveImageRequestValidator()

    failures = await validator.validate(SaveImageRequestDTO(user_id="u1", room_id="", image_url=""))

    assert [f.property_name for f in failures] == ["room_id", "image_url"]
    assert failures[1].error_message == "'image_url' must not be empty."

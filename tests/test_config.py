import logging

from chatapp.config import load_config, configure_logging


def test_defaults(monkeypatch, tmp_path):
    for name in (
        "CHATAPP_DATABASE_URL", "CHATAPP_DATABASE_ECHO", "CLOUDINARY_CLOUD_NAME",
        "CLOUDINARY_FOLDER", "CHATAPP_HTTP_MAX_RETRIES", "CHATAPP_MESSAGE_MAX_LENGTH",
        "CHATAPP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    config = load_config(str(tmp_path / "missing.env"))

    assert config.database.url == "sqlite+aiosqlite:///chatapp.db"
    assert config.database.echo is False
    assert config.cloudinary.folder is None
    assert config.http.max_retries == 3
    assert config.message.max_text_length == 1000
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CHATAPP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("CHATAPP_DATABASE_ECHO", "true")
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_FOLDER", "chat")
    monkeypatch.setenv("CHATAPP_HTTP_MAX_RETRIES", "5")
    monkeypatch.setenv("CHATAPP_MESSAGE_MAX_LENGTH", "280")
    monkeypatch.setenv("CHATAPP_LOG_LEVEL", "debug")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.database.url == "sqlite+aiosqlite:///:memory:"
    assert config.database.echo is True
    assert config.cloudinary.cloud_name == "demo"
    assert config.cloudinary.folder == "chat"
    assert config.http.max_retries == 5
    assert config.message.max_text_length == 280
    assert config.log_level == "DEBUG"


def test_env_file(monkeypatch, tmp_path):
    # setenv first so teardown removes what load_dotenv writes
    monkeypatch.setenv("CLOUDINARY_API_KEY", "placeholder")
    monkeypatch.delenv("CLOUDINARY_API_KEY")
    env_file = tmp_path / ".env"
    env_file.write_text("CLOUDINARY_API_KEY=from-file\n")

    config = load_config(str(env_file))

    assert config.cloudinary.api_key == "from-file"


def test_configure_logging(config):
    logger = configure_logging(config)

    assert isinstance(logger, logging.Logger)
    assert logger.name == "chatapp"

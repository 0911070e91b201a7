import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    url: str = "sqlite+aiosqlite:///chatapp.db"
    echo: bool = False


class CloudinaryConfig(BaseModel):
    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""
    folder: str | None = None
    base_url: str = "https://api.cloudinary.com/v1_1"


class HTTPConfig(BaseModel):
    timeout: float = 60.0
    max_retries: int = 3
    retry_delay: float = 1.0


class MessageConfig(BaseModel):
    max_text_length: int = 1000


class Config(BaseModel):
    database: DatabaseConfig = DatabaseConfig()
    cloudinary: CloudinaryConfig = CloudinaryConfig()
    http: HTTPConfig = HTTPConfig()
    message: MessageConfig = MessageConfig()
    log_level: str = "INFO"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(env_file: str | None = None) -> Config:
    """
    Loads configuration from environment variables (and an optional .env file)
    :param env_file: Path to .env file, defaults to .env in the working directory
    :return: Config
    """
    load_dotenv(env_file)

    return Config(
        database=DatabaseConfig(
            url=os.getenv("CHATAPP_DATABASE_URL", DatabaseConfig().url),
            echo=_env_bool("CHATAPP_DATABASE_ECHO"),
        ),
        cloudinary=CloudinaryConfig(
            cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
            folder=os.getenv("CLOUDINARY_FOLDER") or None,
            base_url=os.getenv("CLOUDINARY_BASE_URL", CloudinaryConfig().base_url),
        ),
        http=HTTPConfig(
            timeout=float(os.getenv("CHATAPP_HTTP_TIMEOUT", HTTPConfig().timeout)),
            max_retries=int(os.getenv("CHATAPP_HTTP_MAX_RETRIES", HTTPConfig().max_retries)),
            retry_delay=float(os.getenv("CHATAPP_HTTP_RETRY_DELAY", HTTPConfig().retry_delay)),
        ),
        message=MessageConfig(
            max_text_length=int(os.getenv("CHATAPP_MESSAGE_MAX_LENGTH", MessageConfig().max_text_length)),
        ),
        log_level=os.getenv("CHATAPP_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(config: Config) -> logging.Logger:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    return logging.getLogger("chatapp")

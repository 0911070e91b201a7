import pytest
import logging

from chatapp.config import Config, DatabaseConfig, CloudinaryConfig, HTTPConfig

@pytest.fixture(autouse=True)
def setup_logging():
    """
    Sets up logging for all tests
    """
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

@pytest.fixture
def config() -> Config:
    return Config(
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
        cloudinary=CloudinaryConfig(
            cloud_name="demo",
            api_key="123456",
            api_secret="secret",
            base_url="https://api.cloudinary.test/v1_1"
        ),
        http=HTTPConfig(timeout=5.0, max_retries=2, retry_delay=0.0),
        log_level="DEBUG",
    )

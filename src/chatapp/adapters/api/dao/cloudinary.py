import hashlib
import logging
import time
from typing import Any

from pydantic import ValidationError

from .common import CommonHTTPClient
from chatapp.adapters.database.dto import ImageFileDTO, ImageUploadResultDTO
from chatapp.config import CloudinaryConfig
from chatapp.exceptions import APIError, NetworkError, InfrastructureError


class CloudinaryHTTPDAO:
    def __init__(
            self,
            http_client: CommonHTTPClient,
            config: CloudinaryConfig,
            logger: logging.Logger | None = None
    ):
        self._http_client = http_client
        self._config = config
        self._logger = logger or logging.getLogger(__name__)

    def sign(self, params: dict[str, Any]) -> str:
        """
        Cloudinary request signature: SHA-1 of the sorted "key=value" pairs
        joined by "&" with the API secret appended
        :param params: Signed parameters (without file, api_key, resource_type)
        :return: Hex digest
        """
        to_sign = "&".join(
            f"{key}={value}" for key, value in sorted(params.items()) if value not in (None, "")
        )
        return hashlib.sha1(f"{to_sign}{self._config.api_secret}".encode()).hexdigest()

    async def upload_image(self, image: ImageFileDTO) -> ImageUploadResultDTO | None:
        """
        Signed upload of an image to Cloudinary
        :param image: Image payload
        :return: Upload result, None if the provider rejected the upload or is unreachable
        """
        params: dict[str, Any] = {"timestamp": int(time.time())}
        if self._config.folder:
            params["folder"] = self._config.folder

        data = {
            **params,
            "api_key": self._config.api_key,
            "signature": self.sign(params),
        }
        files = {"file": (image.filename, image.content, image.content_type)}

        try:
            response = await self._http_client.post_form(
                f"/{self._config.cloud_name}/image/upload", data=data, files=files
            )
        except (APIError, NetworkError, InfrastructureError) as e:
            self._logger.error(f"Image upload failed: {e}")
            return None

        try:
            return ImageUploadResultDTO(
                public_id=response.get("public_id"),
                url=response.get("secure_url") or response["url"],
                secure_url=response.get("secure_url"),
                format=response.get("format"),
                width=response.get("width"),
                height=response.get("height"),
                size=response.get("bytes"),
                created_at=response.get("created_at"),
            )
        except (KeyError, ValidationError) as e:
            self._logger.error(f"Unexpected upload response: {e}")
            return None

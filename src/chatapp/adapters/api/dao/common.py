import httpx
import asyncio
import time
from typing import Any
import logging

from chatapp.exceptions import APIError, NetworkError, InfrastructureError


class CommonHTTPClient:
    """
    Base class for requests to external HTTP providers, using httpx async client
    """
    def __init__(
            self,
            base_url: str,
            timeout: float = 60.0,
            max_retries: int = 3,
            retry_delay: float = 1.0,
            transport: httpx.AsyncBaseTransport | None = None,
            logger: logging.Logger | None = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        self._logger = logger or logging.getLogger(__name__)

    async def initialize(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport
            )

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def post_form(
            self,
            endpoint: str,
            data: dict[str, Any],
            files: dict[str, tuple[str, bytes, str | None]] | None = None
    ) -> dict[str, Any]:
        """
        Multipart/form-encoded POST, used for file uploads
        :param endpoint: Endpoint relative to base url
        :param data: Form fields
        :param files: Mapping field -> (filename, content, content type)
        :return: Decoded JSON response
        """
        return await self._request_with_retry("POST", endpoint, data=data, files=files)

    async def _request_with_retry(self, method: str, endpoint: str, **kwargs) -> dict[str, Any]:
        last_exception = None

        for attempt in range(self.max_retries):
            try:
                return await self._request(method, endpoint, **kwargs)

            except APIError as e:
                if e.is_client_error:
                    raise
                last_exception = e
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (2 ** attempt)
                    self._logger.warning(f"Server error {e.status_code}, retrying in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    raise

            except NetworkError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (2 ** attempt)
                    self._logger.warning(f"Network error, retrying in {delay}s: {e}")
                    await asyncio.sleep(delay)
                else:
                    raise

        if last_exception:
            raise last_exception

    async def _request(self, method: str, endpoint: str, **kwargs) -> dict[str, Any]:
        if not self._client:
            raise RuntimeError("The HTTP client is not initialized. Call initialize() or use async with.")

        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            self._logger.debug(f"HTTP {method} {url}")

            # Never log raw payloads (files, signatures)
            self._logger.debug(f"Request fields: {sorted(kwargs.get('data') or {})}")

            start_time = time.time()
            response = await self._client.request(method, url, **kwargs)
            response_time = time.time() - start_time

            self._logger.debug(f"Response time: {response_time:.2f}s, Status: {response.status_code}")

            response.raise_for_status()

            return response.json() if response.content else {}

        except httpx.HTTPStatusError as e:
            error_message = f"HTTP error {e.response.status_code} for {method} {url}: {e.response.text}"

            if e.response.status_code >= 500:
                self._logger.error(error_message)
            else:
                self._logger.warning(error_message)

            response_data = None
            if e.response.content:
                try:
                    response_data = e.response.json()
                except ValueError:
                    response_data = {"raw_response": e.response.text[:500]}

            raise APIError(
                message=f"API error: {e.response.status_code}",
                status_code=e.response.status_code,
                response_data=response_data
            ) from e

        except httpx.RequestError as e:
            self._logger.error(f"Network error for {method} {url}: {e}")
            raise NetworkError(f"Network error: {e}", original_error=e) from e

        except ValueError as e:
            self._logger.error(f"Invalid JSON response for {method} {url}: {e}")
            raise InfrastructureError(f"Invalid response: {e}", original_error=e) from e

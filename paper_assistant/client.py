"""HTTP client for the paper assistant service."""

import logging
import os

import httpx

from .config import http_timeout
from .errors import ErrorKind, ServiceError
from .models import Paper

logger = logging.getLogger(__name__)

SERVICE_URL = os.environ.get("PAPER_ASSISTANT_URL", "http://localhost:8000")


class BackendClient:
    """Invokes the service functions by name.

    Every failure is raised as a ServiceError so callers only have one
    exception type to handle.
    """

    def __init__(self, base_url: str = SERVICE_URL, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=http_timeout(), transport=self._transport)

    async def _request(self, method: str, path: str, body: dict | None = None) -> httpx.Response:
        try:
            async with self._client() as client:
                resp = await client.request(method, path, json=body)
        except httpx.TransportError as e:
            raise ServiceError(f"{path}: {e}", ErrorKind.NETWORK) from e

        if resp.is_success:
            return resp
        message, kind = resp.text or f"HTTP {resp.status_code}", ErrorKind.DOWNSTREAM
        try:
            payload = resp.json()
            if isinstance(payload, dict):
                message = payload.get("error", message)
                kind = ErrorKind(payload.get("kind", kind.value))
        except ValueError:
            pass  # not an error envelope; keep the raw body
        raise ServiceError(message, kind)

    @staticmethod
    def _papers(resp: httpx.Response) -> list[Paper]:
        try:
            return [Paper.model_validate(p) for p in resp.json()]
        except (ValueError, TypeError) as e:
            raise ServiceError(f"Malformed paper list: {e}", ErrorKind.DOWNSTREAM) from e

    async def invoke(self, function: str, body: dict) -> httpx.Response:
        logger.debug(f"Invoking {function}")
        return await self._request("POST", f"/api/{function}", body)

    async def store_paper(self, text: str) -> Paper:
        resp = await self.invoke("process-paper", {"paperText": text, "operation": "store"})
        try:
            return Paper.model_validate(resp.json())
        except ValueError as e:
            raise ServiceError(f"Malformed paper: {e}", ErrorKind.DOWNSTREAM) from e

    async def find_similar(self, text: str) -> list[Paper]:
        resp = await self.invoke("process-paper", {"paperText": text, "operation": "similar"})
        return self._papers(resp)

    async def generate_summary(self, text: str, fmt: str) -> str:
        resp = await self.invoke("generate-summary", {"text": text, "format": fmt})
        try:
            return resp.json()["summary"]
        except (ValueError, KeyError, TypeError) as e:
            raise ServiceError(f"Malformed summary response: {resp.text}", ErrorKind.DOWNSTREAM) from e

    async def text_to_speech(self, text: str, voice_id: str) -> bytes:
        resp = await self.invoke("text-to-speech", {"text": text, "voiceId": voice_id})
        return resp.content

    async def recent_papers(self) -> list[Paper]:
        resp = await self._request("GET", "/api/papers")
        return self._papers(resp)

import logging
import os

import httpx
import numpy as np

from .config import http_timeout
from .errors import ErrorKind, ServiceError
from .prompts import build_messages

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
MODEL = os.environ.get("PAPER_ASSISTANT_MODEL", "gpt-4")
EMBEDDING_MODEL = os.environ.get("PAPER_ASSISTANT_EMBEDDING_MODEL", "text-embedding-3-small")
# roughly 8k tokens at 4 chars per token
EMBEDDING_MAX_CHARS = 32000


def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=http_timeout())


def _api_key() -> str:
    key = os.environ.get("OPENAI_API_KEY")
    if not key:
        raise ServiceError("OPENAI_API_KEY environment variable is required", ErrorKind.DOWNSTREAM)
    return key


async def _post(path: str, payload: dict) -> dict:
    headers = {
        "Authorization": f"Bearer {_api_key()}",
        "Content-Type": "application/json",
    }
    async with get_http_client() as client:
        resp = await client.post(f"{OPENAI_BASE_URL}{path}", headers=headers, json=payload)
        resp.raise_for_status()
    try:
        return resp.json()
    except ValueError as e:
        raise ServiceError(f"Completions API returned invalid JSON: {e}", ErrorKind.DOWNSTREAM) from e


async def complete_summary(text: str, fmt: str | None) -> str:
    """Single chat completion: system prompt for the format, then the paper text."""
    data = await _post("/chat/completions", {"model": MODEL, "messages": build_messages(text, fmt)})
    try:
        return data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ServiceError(f"Unexpected completions response shape: {data}", ErrorKind.DOWNSTREAM) from e


async def embed_text(text: str) -> np.ndarray:
    """Embed the leading part of `text` that fits the model's input budget."""
    data = await _post("/embeddings", {"model": EMBEDDING_MODEL, "input": text[:EMBEDDING_MAX_CHARS]})
    try:
        return np.asarray(data["data"][0]["embedding"], dtype=float)
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ServiceError(f"Unexpected embeddings response shape: {data}", ErrorKind.DOWNSTREAM) from e

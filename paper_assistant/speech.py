"""Text-to-speech via the ElevenLabs REST API."""

import logging
import os

from .errors import ErrorKind, ServiceError
from .llm import get_http_client
from .models import find_voice

logger = logging.getLogger(__name__)

ELEVENLABS_URL = os.environ.get("ELEVENLABS_URL", "https://api.elevenlabs.io/v1/text-to-speech")
ELEVENLABS_MODEL = os.environ.get("ELEVENLABS_MODEL", "eleven_multilingual_v2")


async def synthesize(text: str, voice_id: str) -> bytes:
    """Return MPEG audio for `text` spoken by `voice_id`."""
    if not text:
        raise ValueError("Text is empty.")
    if find_voice(voice_id) is None:
        raise ValueError(f"Unknown voice: {voice_id}")

    api_key = os.environ.get("ELEVENLABS_API_KEY")
    if not api_key:
        raise ServiceError("ELEVENLABS_API_KEY environment variable is required", ErrorKind.DOWNSTREAM)

    logger.info(f"Synthesizing {len(text)} chars with voice {voice_id}")
    async with get_http_client() as client:
        resp = await client.post(
            f"{ELEVENLABS_URL}/{voice_id}",
            headers={"xi-api-key": api_key, "Accept": "audio/mpeg"},
            json={"text": text, "model_id": ELEVENLABS_MODEL},
        )
        resp.raise_for_status()
    return resp.content

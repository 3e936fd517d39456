"""
Vision-model recognizer for diagnostic-tool screenshots.

The upstream model is rate limited, so every call goes through a
single-slot gate: one request in flight, the rest wait in arrival order.
"""

import asyncio
import json
import logging
import math
import re
from typing import Any, Dict, Optional

from openai import APIError, AsyncOpenAI, RateLimitError

from config import settings
from prompts import load_prompt
from services.extraction import RawExtraction
from services.extraction.selectors import IMEI_LENGTH, SERIAL_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 30
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_gate: Optional[asyncio.Lock] = None
_gate_loop: Optional[asyncio.AbstractEventLoop] = None


class RecognitionError(Exception):
    """The recognizer could not produce a result."""


class RecognitionRateLimited(RecognitionError):
    def __init__(self, retry_after_seconds: int = DEFAULT_RETRY_AFTER_SECONDS):
        super().__init__(f"Recognizer rate limited, retry after {retry_after_seconds}s")
        self.retry_after_seconds = retry_after_seconds


def _recognition_gate() -> asyncio.Lock:
    global _gate, _gate_loop
    loop = asyncio.get_running_loop()
    if _gate is None or _gate_loop is not loop:
        _gate = asyncio.Lock()
        _gate_loop = loop
    return _gate


def _clamp_battery(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return max(0, min(100, round(value)))
    return value


def _load_json_object(content: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(content)
        if not match:
            return {}
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError:
            logger.warning("Recognizer returned unparseable content")
            return {}
    return parsed if isinstance(parsed, dict) else {}


def parse_recognition_content(content: Optional[str]) -> RawExtraction:
    """Coerce the model's loosely-typed JSON reply into a ``RawExtraction``."""
    if not content:
        return RawExtraction()
    parsed = _load_json_object(content)
    if "batteryPercent" in parsed:
        parsed["batteryPercent"] = _clamp_battery(parsed["batteryPercent"])
    return RawExtraction.from_dict(parsed)


def _as_image_url(image_base64: str) -> str:
    if image_base64.startswith("data:"):
        return image_base64
    return f"data:image/png;base64,{image_base64}"


def _retry_after_seconds(error: RateLimitError) -> int:
    response = getattr(error, "response", None)
    header = response.headers.get("retry-after") if response is not None else None
    try:
        seconds = int(float(header)) if header else 0
    except ValueError:
        seconds = 0
    return seconds or DEFAULT_RETRY_AFTER_SECONDS


class DeviceRecognizer:
    """Sends screenshots to an OpenAI-compatible vision model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key
        self.model_name = model_name or settings.openai_vision_model
        self._client = client

    def _get_api_key(self) -> str:
        api_key = self._api_key or settings.openai_api_key
        if not api_key:
            raise ValueError("No OpenAI API key configured")
        return api_key

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._get_api_key(),
                base_url=settings.openai_api_base,
                timeout=settings.recognition_timeout_s,
            )
        return self._client

    def _build_messages(self, image_base64: str, hint: Optional[str]) -> list[dict]:
        prompt = load_prompt(
            "device_extraction",
            imei_length=IMEI_LENGTH,
            serial_length=SERIAL_LENGTH,
            hint=hint,
        )
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": _as_image_url(image_base64)}},
                ],
            }
        ]

    async def recognize(self, image_base64: str, hint: Optional[str] = None) -> RawExtraction:
        """Run the vision model on one screenshot and return its raw readings."""
        client = self._get_client()
        messages = self._build_messages(image_base64, hint)

        async with _recognition_gate():
            try:
                response = await client.chat.completions.create(
                    model=self.model_name,
                    temperature=settings.openai_temperature,
                    messages=messages,
                    response_format={"type": "json_object"},
                )
            except RateLimitError as e:
                retry_after = _retry_after_seconds(e)
                logger.warning(f"Recognizer rate limited, retry after {retry_after}s")
                raise RecognitionRateLimited(retry_after) from e
            except APIError as e:
                logger.error(f"Recognizer request failed: {e}")
                raise RecognitionError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        logger.info(f"Recognizer returned {len(content or '')} characters")
        return parse_recognition_content(content)

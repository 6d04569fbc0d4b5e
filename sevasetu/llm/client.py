# sevasetu/llm/client.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from sevasetu.config import get_settings
from sevasetu.errors import MissingMediaError, RemoteCallError

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    """
    Simple abstraction so we can swap providers if needed.
    """

    @abstractmethod
    async def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        """
        messages: list of {"role": "system"|"user"|"assistant", "content": ...}
        returns: assistant content as a string
        """
        ...

    @abstractmethod
    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        """Speech to text. `language` is a hint such as 'hi-IN'."""
        ...

    @abstractmethod
    async def synthesize(self, text: str, language: str) -> bytes:
        """Text to speech. Returns WAV bytes."""
        ...


_AUDIO_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "audio/m4a": "m4a",
}


class OpenAILLMClient(LLMClient):
    """
    OpenAI implementation using the official Python client.

    Every SDK failure is re-raised as RemoteCallError so callers only
    have to handle one error family.
    """

    def __init__(self, model: Optional[str] = None):
        settings = get_settings()
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set in environment (.env)."
            )

        self.client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        self.default_model = model or settings.llm_model
        self.tts_model = settings.tts_model
        self.tts_voice = settings.tts_voice
        self.transcription_model = settings.transcription_model

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            completion = await self.client.chat.completions.create(
                model=model or self.default_model,
                messages=messages,
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as e:
            raise RemoteCallError(f"Chat completion failed: {e}") from e
        content = completion.choices[0].message.content
        return content or ""

    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        base_type = mime_type.split(";", 1)[0].strip().lower()
        extension = _AUDIO_EXTENSIONS.get(base_type, "webm")
        try:
            result = await self.client.audio.transcriptions.create(
                model=self.transcription_model,
                file=(f"voice.{extension}", audio, base_type or "application/octet-stream"),
                # Whisper wants ISO-639-1, e.g. "hi" rather than "hi-IN"
                language=language.split("-", 1)[0],
            )
        except OpenAIError as e:
            raise RemoteCallError(f"Transcription failed: {e}") from e
        return (result.text or "").strip()

    async def synthesize(self, text: str, language: str) -> bytes:
        try:
            response = await self.client.audio.speech.create(
                model=self.tts_model,
                voice=self.tts_voice,
                input=text,
                response_format="wav",
            )
        except OpenAIError as e:
            raise RemoteCallError(f"Speech synthesis failed: {e}") from e

        audio = response.content
        if not audio:
            raise MissingMediaError("no media returned")
        logger.debug("Synthesized %d bytes of %s speech", len(audio), language)
        return audio

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Union

from sevasetu.errors import MissingMediaError, RemoteCallError
from sevasetu.llm import LLMClient
from sevasetu.services.analysis import SymptomAnalysis

FLU_REPLY = "Diagnosis: Flu\n\nTake rest."
REPLY_AUDIO = "data:audio/wav;base64,UklGRg=="
VOICE_AUDIO = "data:audio/webm;base64,R0tNRQ=="


class FakeSpeech:
    """
    Scripted speech collaborator. With `hold_transcribe=True` transcription
    waits on `release` the same way FakeAnalyzer does.
    """

    def __init__(
        self,
        transcript: str = "I have a fever",
        fail_transcribe: bool = False,
        fail_synthesize: bool = False,
        hold_transcribe: bool = False,
    ):
        self.transcript = transcript
        self.fail_transcribe = fail_transcribe
        self.fail_synthesize = fail_synthesize
        self.hold_transcribe = hold_transcribe
        self.transcribe_calls: List[tuple] = []
        self.synthesize_calls: List[tuple] = []
        self.started: Optional[asyncio.Event] = None
        self.release: Optional[asyncio.Event] = None

    async def synthesize(self, text: str, language: str) -> str:
        self.synthesize_calls.append((text, language))
        if self.fail_synthesize:
            raise MissingMediaError("no media returned")
        return f"data:audio/wav;base64,c3BlZWNo{len(self.synthesize_calls)}"

    async def transcribe(self, audio: str, language: str) -> str:
        self.transcribe_calls.append((audio, language))
        if self.hold_transcribe:
            if self.started is None:
                self.started = asyncio.Event()
                self.release = asyncio.Event()
            self.started.set()
            await self.release.wait()
        if self.fail_transcribe:
            raise RemoteCallError("transcription down")
        return self.transcript


class FakeAnalyzer:
    """
    Scripted analysis collaborator. With `hold=True` every call waits on
    `release` so a test can act while the call is in flight.
    """

    def __init__(self, fail: bool = False, hold: bool = False, audio: Optional[str] = REPLY_AUDIO):
        self.fail = fail
        self.hold = hold
        self.audio = audio
        self.calls: List[Dict[str, Any]] = []
        self.started: Optional[asyncio.Event] = None
        self.release: Optional[asyncio.Event] = None

    async def analyze(self, **kwargs) -> SymptomAnalysis:
        self.calls.append(kwargs)
        if self.hold:
            if self.started is None:
                self.started = asyncio.Event()
                self.release = asyncio.Event()
            self.started.set()
            await self.release.wait()
        if self.fail:
            raise RemoteCallError("model unavailable")
        return SymptomAnalysis(
            diagnosis="Diagnosis: Flu",
            suggested_action="Take rest.",
            response_text=FLU_REPLY,
            response_audio=self.audio,
        )


class FakeLLMClient(LLMClient):
    """LLM client with scripted chat replies and canned audio."""

    def __init__(self):
        self.replies: List[Union[str, Exception]] = []
        self.chat_calls: List[List[Dict[str, Any]]] = []
        self.transcript: Union[str, Exception] = "I have a fever"
        self.audio: Union[bytes, Exception] = b"RIFF-fake-wav"

    async def chat(self, messages, temperature=0.2, model=None, json_mode=False) -> str:
        self.chat_calls.append(messages)
        if not self.replies:
            raise RemoteCallError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        if isinstance(self.transcript, Exception):
            raise self.transcript
        return self.transcript

    async def synthesize(self, text: str, language: str) -> bytes:
        if isinstance(self.audio, Exception):
            raise self.audio
        return self.audio

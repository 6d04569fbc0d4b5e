# sevasetu/session/capture.py
from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from sevasetu.errors import PermissionDeniedError
from sevasetu.session.media import to_data_uri

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_MIME = "audio/webm"


class Microphone(Protocol):
    mime_type: str

    def release(self) -> None: ...


class MicrophoneProvider(Protocol):
    async def acquire(self) -> Microphone: ...


class ClientMicrophone:
    """Handle for a microphone opened in the user's browser."""

    def __init__(self, mime_type: str = DEFAULT_AUDIO_MIME):
        self.mime_type = mime_type
        self.released = False

    def release(self) -> None:
        self.released = True


class ClientMicrophoneProvider:
    """
    The browser asks for the permission; we only learn the outcome.
    """

    def __init__(self, granted: bool, mime_type: str = DEFAULT_AUDIO_MIME):
        self.granted = granted
        self.mime_type = mime_type

    async def acquire(self) -> ClientMicrophone:
        if not self.granted:
            raise PermissionDeniedError("Microphone access was denied")
        return ClientMicrophone(self.mime_type)


class VoiceCaptureController:
    """
    Buffers one recording at a time and turns it into a data URI on stop.
    """

    def __init__(self) -> None:
        self._device: Optional[Microphone] = None
        self._chunks: List[bytes] = []

    @property
    def is_recording(self) -> bool:
        return self._device is not None

    async def start(self, provider: MicrophoneProvider) -> bool:
        """
        Open the microphone and begin buffering.

        Returns False (and does nothing) if a recording is already open.
        PermissionDeniedError propagates with the controller still idle.
        """
        if self.is_recording:
            return False
        device = await provider.acquire()
        self._chunks = []
        self._device = device
        return True

    def push(self, chunk: bytes) -> None:
        if not self.is_recording:
            logger.debug("Dropping %d audio bytes received while not recording", len(chunk))
            return
        self._chunks.append(chunk)

    def stop(self) -> Optional[str]:
        """
        Close the recording and return it as one data URI, or None if
        nothing was recording or nothing was captured.
        """
        if self._device is None:
            return None

        device = self._device
        blob = b"".join(self._chunks)
        self._release()

        if not blob:
            return None
        return to_data_uri(blob, device.mime_type)

    def cancel(self) -> None:
        if self._device is not None:
            self._release()

    def _release(self) -> None:
        device, self._device = self._device, None
        self._chunks = []
        try:
            device.release()
        except Exception:
            logger.warning("Releasing microphone failed", exc_info=True)

# sevasetu/session/playback.py
from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    def play(self, audio: str) -> None: ...

    def stop(self) -> None: ...


class ClientAudioSink:
    """
    Sink for a remote client: remembers the latest command so the next
    snapshot can tell the browser what to play. `sequence` grows with every
    play command, so replaying the same clip is still a new command.
    """

    def __init__(self) -> None:
        self.audio: Optional[str] = None
        self.sequence = 0

    def play(self, audio: str) -> None:
        self.audio = audio
        self.sequence += 1

    def stop(self) -> None:
        self.audio = None


class AudioPlaybackController:
    """
    Owns the single audio-output slot of a session.

    `play` interrupts whatever is playing; nothing is queued. Sink errors
    are logged and never reach the caller.
    """

    def __init__(self, sink: Optional[AudioSink] = None):
        self.sink = sink if sink is not None else ClientAudioSink()
        self._current: Optional[str] = None

    @property
    def now_playing(self) -> Optional[str]:
        return self._current

    @property
    def is_playing(self) -> bool:
        return self._current is not None

    def play(self, audio: Optional[str]) -> None:
        if not audio:
            return
        self.stop()
        try:
            self.sink.play(audio)
        except Exception:
            logger.exception("Audio playback failed")
            return
        self._current = audio

    def stop(self) -> None:
        if self._current is None:
            return
        self._current = None
        try:
            self.sink.stop()
        except Exception:
            logger.warning("Stopping audio failed", exc_info=True)

    def finished(self) -> None:
        """The client reports the clip ended on its own."""
        self._current = None

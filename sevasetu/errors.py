# sevasetu/errors.py
from __future__ import annotations


class SevaSetuError(Exception):
    """Base class for every error raised inside the assistant."""


class RemoteCallError(SevaSetuError):
    """A hosted-model call (analysis, transcription, TTS, prescription) failed."""


class MissingMediaError(RemoteCallError):
    """Text-to-speech returned no audio."""


class PermissionDeniedError(SevaSetuError):
    """The user refused microphone access."""


class GeolocationUnavailableError(SevaSetuError):
    """Device location was denied, failed or is not supported."""


class BlankAnswerError(SevaSetuError, ValueError):
    """An intake answer was empty after trimming whitespace."""


class ActionUnavailableError(SevaSetuError):
    """A gated action was requested before it became available."""


class SessionNotFoundError(SevaSetuError, KeyError):
    pass

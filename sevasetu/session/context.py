# sevasetu/session/context.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional

from sevasetu.i18n import translate
from sevasetu.intake.schema import PatientProfile
from sevasetu.intake.state import IntakeState
from sevasetu.session.capture import VoiceCaptureController
from sevasetu.session.messages import MessageLog
from sevasetu.session.playback import AudioPlaybackController
from sevasetu.session.prescription import Prescription


@dataclass(frozen=True)
class Notice:
    """A toast shown to the user."""

    title: str
    description: str
    variant: str = "destructive"


@dataclass
class SessionContext:
    """
    Everything one chat session knows.

    `generation` is bumped on every restart. Work that awaited a remote
    call compares it before writing, so results belonging to an earlier
    generation are dropped.
    """

    session_id: str
    device_id: str
    language: str
    generation: int = 0
    messages: MessageLog = field(default_factory=MessageLog)
    busy: bool = False
    diagnosis_available: bool = False
    intake: IntakeState = field(default_factory=IntakeState.inactive)
    profile: Optional[PatientProfile] = None
    prescription: Optional[Prescription] = None
    pending_image: Optional[str] = None
    notices: List[Notice] = field(default_factory=list)
    playback: AudioPlaybackController = field(default_factory=AudioPlaybackController)
    capture: VoiceCaptureController = field(default_factory=VoiceCaptureController)

    @property
    def intake_finished(self) -> bool:
        return not self.intake.is_active

    def is_current(self, generation: int) -> bool:
        return self.generation == generation

    def t(self, key: str, **replacements: str) -> str:
        return translate(self.language, key, **replacements)

    def notify(self, title_key: str, description_key: str, variant: str = "destructive") -> Notice:
        notice = Notice(
            title=self.t(title_key),
            description=self.t(description_key),
            variant=variant,
        )
        self.notices.append(notice)
        return notice

    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def profile_json(self) -> Optional[str]:
        if self.profile is None:
            return None
        return json.dumps(self.profile.model_dump(), ensure_ascii=False)

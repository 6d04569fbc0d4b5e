# sevasetu/intake/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sevasetu.intake.stages import IntakeStage
from sevasetu.intake.schema import PatientProfile, ProfileDraft


@dataclass(frozen=True)
class IntakeState:
    """
    Current step pointer plus the fields collected so far.

    Immutable: every advance returns a new state.
    """

    stage: IntakeStage = IntakeStage.AWAITING_NAME
    draft: ProfileDraft = field(default_factory=ProfileDraft)

    @property
    def is_active(self) -> bool:
        return self.stage.is_collecting

    @classmethod
    def inactive(cls) -> "IntakeState":
        return cls(stage=IntakeStage.INACTIVE)


@dataclass(frozen=True)
class IntakeStep:
    state: IntakeState
    prompt: Optional[str]
    profile_update: Optional[PatientProfile] = None

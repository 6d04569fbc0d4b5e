# sevasetu/intake/__init__.py
from .agent import IntakeAgent
from .schema import PatientProfile, ProfileDraft
from .stages import IntakeStage
from .state import IntakeState, IntakeStep

__all__ = [
    "IntakeAgent",
    "IntakeStage",
    "IntakeState",
    "IntakeStep",
    "PatientProfile",
    "ProfileDraft",
]

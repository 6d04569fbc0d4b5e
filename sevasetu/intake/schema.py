# sevasetu/intake/schema.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PatientProfile(BaseModel):
    """
    A completed intake profile.

    Name, age and phone are required; location is optional because the
    location-assist action can work without it.
    """

    name: str = Field(..., min_length=1)
    age: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    location: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }


class ProfileDraft(BaseModel):
    """
    Profile under construction. Owned by the intake state machine and
    never handed to the dispatcher until it converts to a PatientProfile.
    """

    name: Optional[str] = None
    age: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None

    def with_field(self, field: str, value: str) -> "ProfileDraft":
        return self.model_copy(update={field: value})

    def to_profile(self) -> PatientProfile:
        return PatientProfile(
            name=self.name or "",
            age=self.age or "",
            phone=self.phone or "",
            location=self.location or None,
        )

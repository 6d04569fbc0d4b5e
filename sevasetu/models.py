# sevasetu/models.py
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from sevasetu.db import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LanguagePreference(Base):
    """
    Last language picked on a device. Overwritten wholesale on every change.
    """
    __tablename__ = "language_preferences"

    device_id: Mapped[str] = mapped_column(String, primary_key=True)
    language: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class SavedPatientProfile(Base):
    """
    A completed intake profile. Only ever written once all required
    fields are known; partial drafts never reach this table.
    """
    __tablename__ = "patient_profiles"

    device_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)

    __table_args__ = (
        CheckConstraint(
            "length(name) > 0 AND length(age) > 0 AND length(phone) > 0",
            name="ck_patient_profiles_required_fields",
        ),
    )

# sevasetu/services/storage.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from sevasetu.db import SessionLocal, engine, Base
from sevasetu.intake.schema import PatientProfile
from sevasetu.models import LanguagePreference, SavedPatientProfile, utc_now


def init_db() -> None:
    """
    Create all tables.
    Call this once at startup.
    """
    Base.metadata.create_all(bind=engine)


class ProfileStore:
    """
    Durable per-device state: the chosen language and the completed
    patient profile. Each write replaces the previous value wholesale.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    @contextmanager
    def db_session(self):
        db: Session = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # -- language -------------------------------------------------------

    def load_language(self, device_id: str) -> Optional[str]:
        with self.db_session() as session:
            row = session.get(LanguagePreference, device_id)
            return row.language if row is not None else None

    def save_language(self, device_id: str, language: str) -> None:
        with self.db_session() as session:
            row = session.get(LanguagePreference, device_id)
            if row is None:
                session.add(LanguagePreference(device_id=device_id, language=language))
            else:
                row.language = language
                row.updated_at = utc_now()

    # -- profile --------------------------------------------------------

    def load_profile(self, device_id: str) -> Optional[PatientProfile]:
        with self.db_session() as session:
            row = session.get(SavedPatientProfile, device_id)
            if row is None:
                return None
            return PatientProfile(
                name=row.name,
                age=row.age,
                phone=row.phone,
                location=row.location,
            )

    def save_profile(self, device_id: str, profile: PatientProfile) -> None:
        with self.db_session() as session:
            row = session.get(SavedPatientProfile, device_id)
            if row is None:
                session.add(SavedPatientProfile(device_id=device_id, **profile.model_dump()))
            else:
                row.name = profile.name
                row.age = profile.age
                row.phone = profile.phone
                row.location = profile.location
                row.updated_at = utc_now()

    def clear_profile(self, device_id: str) -> None:
        with self.db_session() as session:
            row = session.get(SavedPatientProfile, device_id)
            if row is not None:
                session.delete(row)

# sevasetu/session/prescription.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import quote

from sevasetu.errors import ActionUnavailableError, SevaSetuError
from sevasetu.i18n import translate
from sevasetu.intake.schema import PatientProfile
from sevasetu.session.messages import Role

if TYPE_CHECKING:
    from sevasetu.services.analysis import PrescriptionGenerator
    from sevasetu.session.context import SessionContext

logger = logging.getLogger(__name__)

NO_DIAGNOSIS = "No diagnosis found."


@dataclass(frozen=True)
class MedicineLine:
    name: str
    dosage: str


@dataclass(frozen=True)
class Prescription:
    diagnosis: str
    instructions: str
    medicines: List[MedicineLine] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class PrescriptionAssembler:
    def __init__(self, generator: "PrescriptionGenerator"):
        self.generator = generator

    async def generate(self, ctx: "SessionContext") -> Optional[Prescription]:
        """
        Build a prescription from the current transcript and the latest
        assistant reply.

        One attempt only. On failure a notice is queued, the previous
        prescription stays in place and None is returned.
        """
        if not ctx.diagnosis_available:
            raise ActionUnavailableError("No diagnosis yet")

        generation = ctx.generation
        last = ctx.messages.last(Role.ASSISTANT)
        ctx.busy = True
        try:
            draft = await self.generator.generate(
                conversation_history=ctx.messages.transcript(),
                suggested_diagnosis=last.text if last is not None else NO_DIAGNOSIS,
                language=ctx.language,
            )
        except SevaSetuError as e:
            logger.warning("Prescription generation failed: %s", e)
            if ctx.is_current(generation):
                ctx.notify("error", "prescriptionError")
            return None
        finally:
            if ctx.is_current(generation):
                ctx.busy = False

        if not ctx.is_current(generation):
            logger.info("Dropping prescription for restarted session %s", ctx.session_id)
            return None

        prescription = Prescription(
            diagnosis=draft.diagnosis,
            instructions=draft.instructions,
            medicines=[MedicineLine(name=m.name, dosage=m.dosage) for m in draft.medicines],
        )
        ctx.prescription = prescription
        return prescription


# ----------------------------------------------------------------------
# Export formats
# ----------------------------------------------------------------------


def encode_uri_component(value: str) -> str:
    # Same safe set as JavaScript's encodeURIComponent
    return quote(value, safe="-_.!~*'()")


def normalize_phone(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def format_date(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _render(
    prescription: Prescription,
    profile: Optional[PatientProfile],
    language: str,
    markup: bool,
) -> str:
    def t(key: str) -> str:
        return translate(language, key)

    def bold(text: str) -> str:
        return f"*{text}*" if markup else text

    def italic(text: str) -> str:
        return f"_{text}_" if markup else text

    text = bold(f"{t('appName')} - {t('prescriptionTitle')}") + "\n\n"
    if profile is not None:
        text += f"{bold(t('patientName') + ':')} {profile.name}\n"
        text += f"{bold(t('patientAge') + ':')} {profile.age}\n"
        text += f"{bold(t('patientPhone') + ':')} {profile.phone}\n\n"
    text += f"{bold(t('date') + ':')} {format_date(prescription.created_at)}\n\n"
    text += f"{bold(t('diagnosisTitle') + ':')}\n{prescription.diagnosis}\n\n"
    text += f"{bold(t('medicinesTitle') + ':')}\n"
    for med in prescription.medicines:
        text += f"- {med.name} ({med.dosage})\n"
    text += f"\n{bold(t('instructionsTitle') + ':')}\n{prescription.instructions}\n\n"
    text += italic(t("disclaimer"))
    return text


def format_share_text(
    prescription: Prescription,
    profile: Optional[PatientProfile],
    language: str,
) -> str:
    """Messaging-app flavour: *bold* headings, _italic_ disclaimer."""
    return _render(prescription, profile, language, markup=True)


def plain_text(
    prescription: Prescription,
    profile: Optional[PatientProfile],
    language: str,
) -> str:
    return _render(prescription, profile, language, markup=False)


def whatsapp_link(
    prescription: Prescription,
    profile: Optional[PatientProfile],
    language: str,
    base_url: str = "https://wa.me/",
) -> str:
    body = encode_uri_component(format_share_text(prescription, profile, language))
    phone = normalize_phone(profile.phone if profile else None)
    if not base_url.endswith("/"):
        base_url += "/"
    return f"{base_url}{phone}?text={body}"


def sms_link(
    prescription: Prescription,
    profile: Optional[PatientProfile],
    language: str,
) -> str:
    body = encode_uri_component(plain_text(prescription, profile, language))
    phone = normalize_phone(profile.phone if profile else None)
    return f"sms:{phone}?&body={body}"

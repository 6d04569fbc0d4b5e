# sevasetu/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from sevasetu.intake.schema import PatientProfile
from sevasetu.session.context import SessionContext
from sevasetu.session.playback import ClientAudioSink
from sevasetu.session.prescription import Prescription


class StartSessionRequest(BaseModel):
    device_id: str = Field(..., min_length=1)


class LanguageRequest(BaseModel):
    language: str


class SendMessageRequest(BaseModel):
    text: str = ""
    image: Optional[str] = None


class AttachImageRequest(BaseModel):
    image: Optional[str] = None


class StartRecordingRequest(BaseModel):
    permission_granted: bool
    mime_type: str = "audio/webm"


class AudioChunkRequest(BaseModel):
    data: str = Field(..., description="Base64 encoded audio bytes")


class PlayAudioRequest(BaseModel):
    audio: str


class FindHospitalsRequest(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class LanguageSchema(BaseModel):
    value: str
    label: str


class MessageSchema(BaseModel):
    id: str
    role: str
    text: str
    audio: Optional[str] = None
    image: Optional[str] = None


class NoticeSchema(BaseModel):
    title: str
    description: str
    variant: str


class PlaybackSchema(BaseModel):
    playing: bool
    audio: Optional[str] = None
    sequence: int = 0


class MedicineSchema(BaseModel):
    name: str
    dosage: str


class PrescriptionSchema(BaseModel):
    diagnosis: str
    medicines: List[MedicineSchema]
    instructions: str
    date: datetime

    @classmethod
    def from_prescription(cls, p: Prescription) -> "PrescriptionSchema":
        return cls(
            diagnosis=p.diagnosis,
            medicines=[MedicineSchema(name=m.name, dosage=m.dosage) for m in p.medicines],
            instructions=p.instructions,
            date=p.created_at,
        )


class SessionSnapshot(BaseModel):
    session_id: str
    language: str
    intake_stage: str
    busy: bool
    diagnosis_available: bool
    is_recording: bool
    pending_image: bool
    profile: Optional[PatientProfile] = None
    messages: List[MessageSchema]
    notices: List[NoticeSchema]
    playback: PlaybackSchema
    prescription: Optional[PrescriptionSchema] = None

    @classmethod
    def from_context(cls, ctx: SessionContext) -> "SessionSnapshot":
        """
        Render a session. Reading a snapshot consumes its queued notices,
        so each notice reaches exactly one response, whichever renders first.
        """
        sink = ctx.playback.sink
        sequence = sink.sequence if isinstance(sink, ClientAudioSink) else 0

        return cls(
            session_id=ctx.session_id,
            language=ctx.language,
            intake_stage=ctx.intake.stage.value,
            busy=ctx.busy,
            diagnosis_available=ctx.diagnosis_available,
            is_recording=ctx.capture.is_recording,
            pending_image=ctx.pending_image is not None,
            profile=ctx.profile,
            messages=[
                MessageSchema(id=m.id, role=m.role.value, text=m.text, audio=m.audio, image=m.image)
                for m in ctx.messages
            ],
            notices=[
                NoticeSchema(title=n.title, description=n.description, variant=n.variant)
                for n in ctx.drain_notices()
            ],
            playback=PlaybackSchema(
                playing=ctx.playback.is_playing,
                audio=ctx.playback.now_playing,
                sequence=sequence,
            ),
            prescription=(
                PrescriptionSchema.from_prescription(ctx.prescription)
                if ctx.prescription is not None
                else None
            ),
        )


class TurnResponse(BaseModel):
    status: Optional[str] = None
    session: SessionSnapshot


class PrescriptionResponse(BaseModel):
    prescription: Optional[PrescriptionSchema] = None
    plain_text: Optional[str] = None
    whatsapp_url: Optional[str] = None
    sms_url: Optional[str] = None
    session: SessionSnapshot


class HospitalSearchResponse(BaseModel):
    url: str
    query: str
    bias: Optional[str] = None
    session: SessionSnapshot


class SuggestionsResponse(BaseModel):
    suggestions: Optional[str] = None
    session: SessionSnapshot

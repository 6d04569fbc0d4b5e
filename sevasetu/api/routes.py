# sevasetu/api/routes.py
from __future__ import annotations

import base64
import binascii
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from sevasetu.errors import ActionUnavailableError, SessionNotFoundError
from sevasetu.i18n import SUPPORTED_LANGUAGES
from sevasetu.services.session_service import SessionService, get_session_service
from sevasetu.session.context import SessionContext
from sevasetu.session.location import Coordinates
from .schemas import (
    AttachImageRequest,
    AudioChunkRequest,
    FindHospitalsRequest,
    HospitalSearchResponse,
    LanguageRequest,
    LanguageSchema,
    PlayAudioRequest,
    PrescriptionResponse,
    PrescriptionSchema,
    SendMessageRequest,
    SessionSnapshot,
    StartRecordingRequest,
    StartSessionRequest,
    SuggestionsResponse,
    TurnResponse,
)

router = APIRouter()


def _session_or_404(service: SessionService, session_id: str) -> SessionContext:
    try:
        return service.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Session not found. Start a new session.",
        )


def _unsupported_language(language: str) -> HTTPException:
    return HTTPException(status_code=422, detail=f"Unsupported language: {language}")


@router.get("/languages", response_model=List[LanguageSchema])
def list_languages() -> List[LanguageSchema]:
    return [LanguageSchema(value=lang.value, label=lang.label) for lang in SUPPORTED_LANGUAGES]


@router.post("/sessions", response_model=SessionSnapshot)
async def start_session(
    payload: StartSessionRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    """
    Open a chat session for a device.
    Returning devices skip intake; new ones get the first intake question.
    """
    ctx = await service.start_session(payload.device_id)
    return SessionSnapshot.from_context(ctx)


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
def get_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    return SessionSnapshot.from_context(_session_or_404(service, session_id))


@router.post("/sessions/{session_id}/language", response_model=SessionSnapshot)
async def change_language(
    session_id: str,
    payload: LanguageRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    try:
        ctx = await service.change_language(session_id, payload.language)
    except ValueError:
        raise _unsupported_language(payload.language)
    return SessionSnapshot.from_context(ctx)


@router.post("/sessions/{session_id}/restart", response_model=SessionSnapshot)
async def restart_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    ctx = await service.restart(session_id)
    return SessionSnapshot.from_context(ctx)


@router.post("/sessions/{session_id}/messages", response_model=TurnResponse)
async def send_message(
    session_id: str,
    payload: SendMessageRequest,
    service: SessionService = Depends(get_session_service),
) -> TurnResponse:
    _session_or_404(service, session_id)
    ctx, outcome = await service.send_message(session_id, payload.text, payload.image)
    return TurnResponse(status=outcome.status.value, session=SessionSnapshot.from_context(ctx))


@router.post("/sessions/{session_id}/image", response_model=SessionSnapshot)
def attach_image(
    session_id: str,
    payload: AttachImageRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    ctx = service.attach_image(session_id, payload.image)
    return SessionSnapshot.from_context(ctx)


@router.post("/sessions/{session_id}/voice/start", response_model=SessionSnapshot)
async def start_recording(
    session_id: str,
    payload: StartRecordingRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    ctx = await service.start_recording(session_id, payload.permission_granted, payload.mime_type)
    return SessionSnapshot.from_context(ctx)


@router.post("/sessions/{session_id}/voice/chunk", status_code=204)
def push_audio_chunk(
    session_id: str,
    payload: AudioChunkRequest,
    service: SessionService = Depends(get_session_service),
) -> None:
    _session_or_404(service, session_id)
    try:
        chunk = base64.b64decode(payload.data, validate=True)
    except binascii.Error:
        raise HTTPException(status_code=400, detail="Audio chunk is not valid base64.")
    service.push_audio(session_id, chunk)


@router.post("/sessions/{session_id}/voice/stop", response_model=TurnResponse)
async def stop_recording(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> TurnResponse:
    _session_or_404(service, session_id)
    ctx, outcome = await service.stop_recording(session_id)
    return TurnResponse(
        status=outcome.status.value if outcome is not None else None,
        session=SessionSnapshot.from_context(ctx),
    )


@router.post("/sessions/{session_id}/audio/play", response_model=SessionSnapshot)
def play_audio(
    session_id: str,
    payload: PlayAudioRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    return SessionSnapshot.from_context(service.play_audio(session_id, payload.audio))


@router.post("/sessions/{session_id}/audio/stop", response_model=SessionSnapshot)
def stop_audio(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    return SessionSnapshot.from_context(service.stop_audio(session_id))


@router.post("/sessions/{session_id}/audio/ended", response_model=SessionSnapshot)
def audio_ended(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    return SessionSnapshot.from_context(service.audio_finished(session_id))


@router.post("/sessions/{session_id}/instructions", response_model=SessionSnapshot)
async def play_instructions(
    session_id: str,
    payload: LanguageRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionSnapshot:
    _session_or_404(service, session_id)
    try:
        ctx = await service.play_instructions(session_id, payload.language)
    except ValueError:
        raise _unsupported_language(payload.language)
    return SessionSnapshot.from_context(ctx)


@router.post("/sessions/{session_id}/prescription", response_model=PrescriptionResponse)
async def generate_prescription(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> PrescriptionResponse:
    ctx = _session_or_404(service, session_id)
    try:
        prescription = await service.generate_prescription(session_id)
    except ActionUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if prescription is None:
        # Failed call: keep whatever was generated before.
        return PrescriptionResponse(session=SessionSnapshot.from_context(ctx))

    exports = service.prescription_exports(session_id)
    return PrescriptionResponse(
        prescription=PrescriptionSchema.from_prescription(prescription),
        plain_text=exports["plain_text"],
        whatsapp_url=exports["whatsapp_url"],
        sms_url=exports["sms_url"],
        session=SessionSnapshot.from_context(ctx),
    )


@router.get("/sessions/{session_id}/prescription.txt", response_class=PlainTextResponse)
def download_prescription(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> PlainTextResponse:
    _session_or_404(service, session_id)
    try:
        exports = service.prescription_exports(session_id)
    except ActionUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return PlainTextResponse(
        exports["plain_text"],
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="prescription.txt"'},
    )


@router.post("/sessions/{session_id}/hospitals", response_model=HospitalSearchResponse)
async def find_hospitals(
    session_id: str,
    payload: FindHospitalsRequest,
    service: SessionService = Depends(get_session_service),
) -> HospitalSearchResponse:
    ctx = _session_or_404(service, session_id)

    coordinates = None
    if payload.latitude is not None and payload.longitude is not None:
        coordinates = Coordinates(latitude=payload.latitude, longitude=payload.longitude)

    try:
        search = await service.find_hospitals(session_id, coordinates)
    except ActionUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return HospitalSearchResponse(
        url=search.url,
        query=search.query,
        bias=search.bias,
        session=SessionSnapshot.from_context(ctx),
    )


@router.post("/sessions/{session_id}/suggestions", response_model=SuggestionsResponse)
async def follow_up_suggestions(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SuggestionsResponse:
    ctx = _session_or_404(service, session_id)
    try:
        suggestions = await service.suggest_follow_up(session_id)
    except ActionUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SuggestionsResponse(suggestions=suggestions, session=SessionSnapshot.from_context(ctx))

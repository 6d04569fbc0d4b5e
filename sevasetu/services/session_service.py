# sevasetu/services/session_service.py
from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Dict, Optional, Tuple

from sevasetu.config import Settings, get_settings
from sevasetu.errors import (
    ActionUnavailableError,
    GeolocationUnavailableError,
    PermissionDeniedError,
    SessionNotFoundError,
    SevaSetuError,
)
from sevasetu.i18n import DEFAULT_LANGUAGE, is_supported
from sevasetu.intake.agent import IntakeAgent
from sevasetu.llm import LLMClient, OpenAILLMClient
from sevasetu.services.analysis import (
    FollowUpAdvisor,
    PrescriptionGenerator,
    SpeechService,
    SymptomAnalyzer,
)
from sevasetu.services.storage import ProfileStore
from sevasetu.session.capture import ClientMicrophoneProvider
from sevasetu.session.context import SessionContext
from sevasetu.session.dispatcher import (
    ConversationDispatcher,
    DispatchOutcome,
    TextTurn,
    VoiceTurn,
)
from sevasetu.session.location import Coordinates, NearbySearch, find_nearby
from sevasetu.session.messages import Role
from sevasetu.session.prescription import (
    Prescription,
    PrescriptionAssembler,
    plain_text,
    sms_link,
    whatsapp_link,
)

logger = logging.getLogger(__name__)


class SessionService:
    """
    Service that coordinates:
      - the in-memory registry of chat sessions
      - the conversation dispatcher and the gated actions
      - per-device persistence of language and profile
    """

    def __init__(
        self,
        llm_client: LLMClient,
        store: Optional[ProfileStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store or ProfileStore()

        speech = SpeechService(llm_client)
        self.dispatcher = ConversationDispatcher(
            agent=IntakeAgent(),
            analyzer=SymptomAnalyzer(llm_client, speech),
            speech=speech,
            store=self.store,
        )
        self.prescriptions = PrescriptionAssembler(PrescriptionGenerator(llm_client))
        self.advisor = FollowUpAdvisor(llm_client)

        self._sessions: Dict[str, SessionContext] = {}

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def start_session(self, device_id: str) -> SessionContext:
        default_language = self.settings.default_language
        if not is_supported(default_language):
            default_language = DEFAULT_LANGUAGE

        ctx = SessionContext(
            session_id=uuid.uuid4().hex,
            device_id=device_id,
            language=default_language,
        )
        await self.dispatcher.open(ctx)
        self._sessions[ctx.session_id] = ctx
        logger.info("Opened session %s for device %s", ctx.session_id, device_id)
        return ctx

    def get(self, session_id: str) -> SessionContext:
        ctx = self._sessions.get(session_id)
        if ctx is None:
            raise SessionNotFoundError(session_id)
        return ctx

    async def change_language(self, session_id: str, language: str) -> SessionContext:
        if not is_supported(language):
            raise ValueError(f"Unsupported language: {language}")
        ctx = self.get(session_id)
        await self.dispatcher.restart(ctx, language, play_audio=True)
        return ctx

    async def restart(self, session_id: str) -> SessionContext:
        ctx = self.get(session_id)
        await self.dispatcher.restart(ctx, ctx.language, play_audio=True)
        return ctx

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    async def send_message(
        self,
        session_id: str,
        text: str,
        image: Optional[str] = None,
    ) -> Tuple[SessionContext, DispatchOutcome]:
        ctx = self.get(session_id)
        ctx.playback.stop()
        if image is None:
            image, ctx.pending_image = ctx.pending_image, None
        outcome = await self.dispatcher.submit(ctx, TextTurn(text=text, image=image))
        return ctx, outcome

    def attach_image(self, session_id: str, image: Optional[str]) -> SessionContext:
        ctx = self.get(session_id)
        ctx.pending_image = image
        return ctx

    async def start_recording(
        self,
        session_id: str,
        permission_granted: bool,
        mime_type: str,
    ) -> SessionContext:
        ctx = self.get(session_id)
        ctx.playback.stop()
        provider = ClientMicrophoneProvider(granted=permission_granted, mime_type=mime_type)
        try:
            await ctx.capture.start(provider)
        except PermissionDeniedError as e:
            logger.info("Microphone unavailable for session %s: %s", session_id, e)
            ctx.notify("micError", "micErrorDescription")
        return ctx

    def push_audio(self, session_id: str, chunk: bytes) -> SessionContext:
        ctx = self.get(session_id)
        ctx.capture.push(chunk)
        return ctx

    async def stop_recording(
        self,
        session_id: str,
    ) -> Tuple[SessionContext, Optional[DispatchOutcome]]:
        """
        Close the recording and send it as a voice turn, together with
        any image the user attached meanwhile.
        """
        ctx = self.get(session_id)
        audio = ctx.capture.stop()
        if audio is None:
            return ctx, None

        image, ctx.pending_image = ctx.pending_image, None
        outcome = await self.dispatcher.submit(ctx, VoiceTurn(audio=audio, image=image))
        return ctx, outcome

    # ------------------------------------------------------------------
    # Audio
    # ------------------------------------------------------------------

    def play_audio(self, session_id: str, audio: str) -> SessionContext:
        ctx = self.get(session_id)
        ctx.playback.play(audio)
        return ctx

    def stop_audio(self, session_id: str) -> SessionContext:
        ctx = self.get(session_id)
        ctx.playback.stop()
        return ctx

    def audio_finished(self, session_id: str) -> SessionContext:
        ctx = self.get(session_id)
        ctx.playback.finished()
        return ctx

    async def play_instructions(self, session_id: str, language: str) -> SessionContext:
        if not is_supported(language):
            raise ValueError(f"Unsupported language: {language}")
        ctx = self.get(session_id)
        await self.dispatcher.speak_instructions(ctx, language)
        return ctx

    # ------------------------------------------------------------------
    # Gated actions
    # ------------------------------------------------------------------

    async def generate_prescription(self, session_id: str) -> Optional[Prescription]:
        ctx = self.get(session_id)
        return await self.prescriptions.generate(ctx)

    def prescription_exports(self, session_id: str) -> Dict[str, str]:
        ctx = self.get(session_id)
        if ctx.prescription is None:
            raise ActionUnavailableError("No prescription generated yet")
        return {
            "plain_text": plain_text(ctx.prescription, ctx.profile, ctx.language),
            "whatsapp_url": whatsapp_link(
                ctx.prescription, ctx.profile, ctx.language, base_url=self.settings.whatsapp_url
            ),
            "sms_url": sms_link(ctx.prescription, ctx.profile, ctx.language),
        }

    async def find_hospitals(
        self,
        session_id: str,
        coordinates: Optional[Coordinates] = None,
    ) -> NearbySearch:
        ctx = self.get(session_id)

        async def locate() -> Coordinates:
            if coordinates is None:
                raise GeolocationUnavailableError("Client did not share a position")
            return coordinates

        return await find_nearby(ctx, locate, maps_search_url=self.settings.maps_search_url)

    async def suggest_follow_up(self, session_id: str) -> Optional[str]:
        ctx = self.get(session_id)
        if not ctx.intake_finished:
            raise ActionUnavailableError("Intake still in progress")

        generation = ctx.generation
        last_user = ctx.messages.last(Role.USER)
        try:
            suggestions = await self.advisor.suggest(
                conversation_history=ctx.messages.transcript(),
                current_symptoms=last_user.text if last_user else "",
                language=ctx.language,
            )
        except SevaSetuError as e:
            logger.warning("Follow-up suggestions failed: %s", e)
            if ctx.is_current(generation):
                ctx.notify("error", "aiError")
            return None

        if not ctx.is_current(generation):
            return None
        return suggestions


@lru_cache(maxsize=1)
def get_session_service() -> SessionService:
    return SessionService(llm_client=OpenAILLMClient())

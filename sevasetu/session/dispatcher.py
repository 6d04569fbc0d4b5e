# sevasetu/session/dispatcher.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from sevasetu.errors import SevaSetuError
from sevasetu.i18n import translate
from sevasetu.intake.agent import IntakeAgent
from sevasetu.intake.state import IntakeState
from sevasetu.session.context import SessionContext
from sevasetu.session.messages import Message, Role

if TYPE_CHECKING:
    from sevasetu.services.analysis import SpeechService, SymptomAnalyzer
    from sevasetu.services.storage import ProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextTurn:
    text: str
    image: Optional[str] = None


@dataclass(frozen=True)
class VoiceTurn:
    audio: str
    image: Optional[str] = None


Turn = Union[TextTurn, VoiceTurn]


class DispatchStatus(str, Enum):
    IGNORED = "ignored"
    INTAKE = "intake"
    ANSWERED = "answered"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True)
class DispatchOutcome:
    status: DispatchStatus
    message_id: Optional[str] = None


class ConversationDispatcher:
    """
    Routes every user turn of a session.

    While intake is collecting, turns feed the IntakeAgent and no analysis
    call is made. Afterwards each turn becomes one analysis call whose
    reply is appended to the log and played back.

    Remote failures never escape `submit`: they become notices, and any
    voice placeholder is removed. The busy flag is cleared on every path.
    """

    def __init__(
        self,
        agent: IntakeAgent,
        analyzer: "SymptomAnalyzer",
        speech: "SpeechService",
        store: "ProfileStore",
    ):
        self.agent = agent
        self.analyzer = analyzer
        self.speech = speech
        self.store = store

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def open(self, ctx: SessionContext) -> None:
        """
        Initialise a fresh context from what the device has persisted.

        Returning users skip intake and get a welcome-back message; new
        users start intake silently in their stored (or default) language.
        """
        stored_language = self.store.load_language(ctx.device_id)
        if stored_language:
            ctx.language = stored_language

        profile = self.store.load_profile(ctx.device_id)
        if profile is not None:
            ctx.profile = profile
            ctx.intake = IntakeState.inactive()
            ctx.messages.append(
                Message(role=Role.ASSISTANT, text=ctx.t("welcomeBack", name=profile.name))
            )
            return

        ctx.intake, opening = self.agent.start(ctx.language)
        ctx.messages.append(Message(role=Role.ASSISTANT, text=opening))

    async def restart(self, ctx: SessionContext, language: str, play_audio: bool = True) -> None:
        """
        Start intake over, optionally in a new language.

        Bumps the generation so replies still in flight are discarded.
        """
        ctx.playback.stop()
        ctx.capture.cancel()
        ctx.generation += 1
        generation = ctx.generation

        ctx.language = language
        self.store.save_language(ctx.device_id, language)
        self.store.clear_profile(ctx.device_id)

        ctx.profile = None
        ctx.messages.clear()
        ctx.busy = False
        ctx.diagnosis_available = False
        ctx.pending_image = None
        ctx.prescription = None

        ctx.intake, opening = self.agent.restart(language)
        logger.info("Session %s restarted in %s (generation %d)", ctx.session_id, language, generation)
        await self._say(ctx, opening, generation, speak=play_audio)

    async def speak_instructions(self, ctx: SessionContext, language: str) -> None:
        """Read the usage instructions aloud. Failures are only logged."""
        ctx.playback.stop()
        generation = ctx.generation
        text = translate(language, "instructions")
        try:
            audio = await self.speech.synthesize(text, language)
        except SevaSetuError as e:
            logger.warning("Could not voice instructions: %s", e)
            return
        if ctx.is_current(generation):
            ctx.playback.play(audio)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    async def submit(self, ctx: SessionContext, turn: Turn) -> DispatchOutcome:
        if isinstance(turn, TextTurn):
            if ctx.intake.is_active:
                if not turn.text.strip():
                    return DispatchOutcome(DispatchStatus.IGNORED)
                return await self._intake_text(ctx, turn)
            if not turn.text.strip() and not turn.image:
                return DispatchOutcome(DispatchStatus.IGNORED)
            return await self._chat_text(ctx, turn)

        if ctx.intake.is_active:
            return await self._intake_voice(ctx, turn)
        return await self._chat_voice(ctx, turn)

    async def _intake_text(self, ctx: SessionContext, turn: TextTurn) -> DispatchOutcome:
        ctx.messages.append(Message(role=Role.USER, text=turn.text, image=turn.image))
        return await self._advance_intake(ctx, turn.text, ctx.generation)

    async def _intake_voice(self, ctx: SessionContext, turn: VoiceTurn) -> DispatchOutcome:
        generation = ctx.generation
        placeholder = self._add_placeholder(ctx, turn)

        ctx.busy = True
        try:
            answer = await self.speech.transcribe(turn.audio, ctx.language)
        except SevaSetuError as e:
            logger.warning("Voice answer during intake failed: %s", e)
            if not ctx.is_current(generation):
                return DispatchOutcome(DispatchStatus.STALE)
            ctx.messages.remove(placeholder.id)
            ctx.notify("error", "voiceError")
            return DispatchOutcome(DispatchStatus.FAILED)
        finally:
            if ctx.is_current(generation):
                ctx.busy = False

        if not ctx.is_current(generation):
            return DispatchOutcome(DispatchStatus.STALE)

        ctx.messages.replace_text(placeholder.id, answer)
        return await self._advance_intake(ctx, answer, generation)

    async def _advance_intake(self, ctx: SessionContext, answer: str, generation: int) -> DispatchOutcome:
        step = self.agent.advance(ctx.intake, answer, ctx.language)
        ctx.intake = step.state

        if step.profile_update is not None:
            self.store.save_profile(ctx.device_id, step.profile_update)
            ctx.profile = step.profile_update
            logger.info("Intake complete for device %s", ctx.device_id)

        message = None
        if step.prompt:
            message = await self._say(ctx, step.prompt, generation)
        return DispatchOutcome(DispatchStatus.INTAKE, message.id if message else None)

    async def _chat_text(self, ctx: SessionContext, turn: TextTurn) -> DispatchOutcome:
        generation = ctx.generation
        history = ctx.messages.transcript()
        ctx.messages.append(Message(role=Role.USER, text=turn.text, image=turn.image))

        ctx.busy = True
        try:
            result = await self.analyzer.analyze(
                symptoms=turn.text,
                language=ctx.language,
                chat_history=history or None,
                image_data_uri=turn.image,
                patient_details=ctx.profile_json(),
            )
        except SevaSetuError as e:
            logger.warning("Analysis failed: %s", e)
            if not ctx.is_current(generation):
                return DispatchOutcome(DispatchStatus.STALE)
            ctx.notify("error", "aiError")
            return DispatchOutcome(DispatchStatus.FAILED)
        finally:
            if ctx.is_current(generation):
                ctx.busy = False

        if not ctx.is_current(generation):
            logger.info("Dropping analysis for restarted session %s", ctx.session_id)
            return DispatchOutcome(DispatchStatus.STALE)

        return self._deliver(ctx, result.response_text, result.response_audio)

    async def _chat_voice(self, ctx: SessionContext, turn: VoiceTurn) -> DispatchOutcome:
        generation = ctx.generation
        history = ctx.messages.transcript()
        placeholder = self._add_placeholder(ctx, turn)

        ctx.busy = True
        try:
            transcript = await self.speech.transcribe(turn.audio, ctx.language)
            if not ctx.is_current(generation):
                return DispatchOutcome(DispatchStatus.STALE)
            ctx.messages.replace_text(placeholder.id, transcript)

            result = await self.analyzer.analyze(
                symptoms=transcript,
                language=ctx.language,
                chat_history=history or None,
                image_data_uri=turn.image,
                patient_details=ctx.profile_json(),
            )
        except SevaSetuError as e:
            logger.warning("Voice turn failed: %s", e)
            if not ctx.is_current(generation):
                return DispatchOutcome(DispatchStatus.STALE)
            # No confirmed transcript: the turn leaves no trace in the log.
            ctx.messages.remove(placeholder.id)
            ctx.notify("error", "voiceError")
            return DispatchOutcome(DispatchStatus.FAILED)
        finally:
            if ctx.is_current(generation):
                ctx.busy = False

        if not ctx.is_current(generation):
            logger.info("Dropping voice analysis for restarted session %s", ctx.session_id)
            return DispatchOutcome(DispatchStatus.STALE)

        return self._deliver(ctx, result.response_text, result.response_audio)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _add_placeholder(self, ctx: SessionContext, turn: VoiceTurn) -> Message:
        return ctx.messages.append(
            Message(
                role=Role.USER,
                text=ctx.t("processingVoice"),
                audio=turn.audio,
                image=turn.image,
            )
        )

    def _deliver(self, ctx: SessionContext, text: str, audio: Optional[str]) -> DispatchOutcome:
        message = ctx.messages.append(Message(role=Role.ASSISTANT, text=text, audio=audio))
        ctx.diagnosis_available = True
        ctx.playback.play(audio)
        return DispatchOutcome(DispatchStatus.ANSWERED, message.id)

    async def _say(
        self,
        ctx: SessionContext,
        text: str,
        generation: int,
        speak: bool = True,
    ) -> Optional[Message]:
        """
        Append an assistant message, voiced when `speak` is set.

        A speech failure leaves a text-only message. Returns None if the
        session was restarted while speech was being generated.
        """
        audio = None
        if speak:
            language = ctx.language
            ctx.busy = True
            try:
                audio = await self.speech.synthesize(text, language)
            except SevaSetuError as e:
                logger.warning("Speech synthesis failed, sending text only: %s", e)
            finally:
                if ctx.is_current(generation):
                    ctx.busy = False

        if not ctx.is_current(generation):
            return None

        message = ctx.messages.append(Message(role=Role.ASSISTANT, text=text, audio=audio))
        ctx.playback.play(audio)
        return message

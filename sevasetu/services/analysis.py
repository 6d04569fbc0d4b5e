# sevasetu/services/analysis.py
"""
Remote collaborators: symptom analysis, speech, prescription and follow-up
suggestions. Each one is a single request/response call to the hosted model.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from sevasetu.errors import RemoteCallError
from sevasetu.i18n import language_label
from sevasetu.llm import LLMClient, parse_llm_json
from sevasetu.llm.prompts import (
    build_diagnosis_messages,
    build_follow_up_messages,
    build_prescription_messages,
)
from sevasetu.session.media import parse_data_uri, to_data_uri

logger = logging.getLogger(__name__)


def _prompt_language(language: str) -> str:
    return f"{language_label(language)} ({language})"


class SpeechService:
    """
    Text <-> speech, with audio passed around as data URIs.
    """

    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    async def synthesize(self, text: str, language: str) -> str:
        audio = await self.llm.synthesize(text, language)
        return to_data_uri(audio, "audio/wav")

    async def transcribe(self, audio_data_uri: str, language: str) -> str:
        try:
            media = parse_data_uri(audio_data_uri)
        except ValueError as e:
            raise RemoteCallError(f"Unreadable audio: {e}") from e

        text = await self.llm.transcribe(media.data, media.mime_type, language)
        if not text.strip():
            raise RemoteCallError("Transcription came back empty")
        return text


class _DiagnosisReply(BaseModel):
    diagnosis: str = Field(..., min_length=1)
    suggested_action: str = Field(..., alias="suggestedAction")

    model_config = {"extra": "ignore", "populate_by_name": True}


class SymptomAnalysis(BaseModel):
    diagnosis: str
    suggested_action: str
    response_text: str
    response_audio: Optional[str] = None


class SymptomAnalyzer:
    def __init__(self, llm_client: LLMClient, speech: SpeechService):
        self.llm = llm_client
        self.speech = speech

    async def analyze(
        self,
        symptoms: str,
        language: str,
        chat_history: Optional[str] = None,
        image_data_uri: Optional[str] = None,
        patient_details: Optional[str] = None,
    ) -> SymptomAnalysis:
        """
        Ask for a diagnosis, then voice it.

        A speech failure only drops the audio; the text result stands.
        """
        messages = build_diagnosis_messages(
            symptoms=symptoms,
            language=_prompt_language(language),
            chat_history=chat_history,
            image_data_uri=image_data_uri,
            patient_details=patient_details,
        )
        raw = await self.llm.chat(messages, temperature=0.3, json_mode=True)
        reply = parse_llm_json(raw, _DiagnosisReply)

        response_text = f"{reply.diagnosis}\n\n{reply.suggested_action}"

        audio: Optional[str] = None
        try:
            audio = await self.speech.synthesize(response_text, language)
        except RemoteCallError as e:
            logger.warning("Speech for diagnosis failed, continuing text-only: %s", e)

        return SymptomAnalysis(
            diagnosis=reply.diagnosis,
            suggested_action=reply.suggested_action,
            response_text=response_text,
            response_audio=audio,
        )


class Medicine(BaseModel):
    name: str
    dosage: str


class PrescriptionDraft(BaseModel):
    diagnosis: str
    medicines: List[Medicine] = Field(default_factory=list)
    instructions: str

    model_config = {"extra": "ignore"}


class PrescriptionGenerator:
    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    async def generate(
        self,
        conversation_history: str,
        suggested_diagnosis: str,
        language: str,
    ) -> PrescriptionDraft:
        messages = build_prescription_messages(
            conversation_history=conversation_history,
            suggested_diagnosis=suggested_diagnosis,
            language=_prompt_language(language),
        )
        raw = await self.llm.chat(messages, temperature=0.1, json_mode=True)
        return parse_llm_json(raw, PrescriptionDraft)


class _FollowUpReply(BaseModel):
    suggestions: str


class FollowUpAdvisor:
    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    async def suggest(
        self,
        conversation_history: str,
        current_symptoms: str,
        language: str,
    ) -> str:
        messages = build_follow_up_messages(
            conversation_history=conversation_history,
            current_symptoms=current_symptoms,
            language=_prompt_language(language),
        )
        raw = await self.llm.chat(messages, temperature=0.2, json_mode=True)
        return parse_llm_json(raw, _FollowUpReply).suggestions.strip()

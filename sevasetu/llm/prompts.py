# sevasetu/llm/prompts.py
"""
Prompt templates for the hosted model.

Each builder returns an OpenAI-style message list. The model is always asked
for a single JSON object so replies can be validated before use.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


DIAGNOSIS_SYSTEM_PROMPT = (
    "You are a multilingual AI medical assistant helping patients with initial, "
    "temporary relief for minor ailments. Reply in the same language as the patient.\n\n"
    "RULES:\n"
    "- Give a possible diagnosis and a course of action.\n"
    "- Suggest specific generic over-the-counter medicines or creams and simple home remedies.\n"
    "- Be direct and concise. Do not ask follow-up questions.\n"
    "- If an image is attached, look at it for visible symptoms.\n\n"
    "Return a single JSON object: "
    '{"diagnosis": string, "suggestedAction": string}. '
    'Start the diagnosis value with the label "Diagnosis:".'
)

PRESCRIPTION_SYSTEM_PROMPT = (
    "You generate structured prescription data from a patient conversation and a "
    "suggested diagnosis.\n\n"
    "Return a single JSON object:\n"
    "{\n"
    '  "diagnosis": string,\n'
    '  "medicines": [{"name": string, "dosage": string}, ...],\n'
    '  "instructions": string\n'
    "}\n"
    "- medicines: 1-3 generic over-the-counter medicines; dosage like 'Twice a day after meals'.\n"
    "- instructions: short, clear advice for the patient."
)

FOLLOW_UP_SYSTEM_PROMPT = (
    "You analyse a patient's conversation history and suggest what else should be "
    "asked or recorded so a future practitioner understands the condition.\n\n"
    "RULES:\n"
    "- Refer only to the patient's own history.\n"
    "- Do not give medical advice and do not tell the patient to see a doctor.\n"
    "- At most 2 sentences, easy for a patient to understand.\n\n"
    'Return a single JSON object: {"suggestions": string}.'
)


def build_diagnosis_messages(
    symptoms: str,
    language: str,
    chat_history: Optional[str] = None,
    image_data_uri: Optional[str] = None,
    patient_details: Optional[str] = None,
) -> List[Dict[str, Any]]:
    text = (
        f"Patient details: {patient_details or 'not provided'}\n\n"
        "Chat history (if any):\n"
        f"{chat_history or ''}\n\n"
        f"Symptoms: {symptoms}\n"
        f"Language: {language}"
    )

    content: Any = text
    if image_data_uri:
        content = [
            {"type": "text", "text": text},
            {"type": "image_url", "image_url": {"url": image_data_uri}},
        ]

    return [
        {"role": "system", "content": DIAGNOSIS_SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]


def build_prescription_messages(
    conversation_history: str,
    suggested_diagnosis: str,
    language: str,
) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": PRESCRIPTION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                "Conversation history:\n"
                f"{conversation_history}\n\n"
                "Suggested diagnosis:\n"
                f"{suggested_diagnosis}\n\n"
                f"Write the prescription in {language}. "
                "Return ONLY the JSON object."
            ),
        },
    ]


def build_follow_up_messages(
    conversation_history: str,
    current_symptoms: str,
    language: str,
) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": FOLLOW_UP_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                "Conversation history:\n"
                f"{conversation_history}\n\n"
                f"Current symptoms: {current_symptoms}\n"
                f"Language: {language}"
            ),
        },
    ]

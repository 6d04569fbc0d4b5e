from __future__ import annotations

import asyncio
import json

import pytest

from sevasetu.intake import IntakeStage, IntakeState, PatientProfile
from sevasetu.session.dispatcher import DispatchStatus, TextTurn, VoiceTurn
from sevasetu.session.messages import Message, Role

from fakes import FLU_REPLY, REPLY_AUDIO, VOICE_AUDIO


def _finish_intake(ctx):
    ctx.intake = IntakeState(stage=IntakeStage.COMPLETE)
    ctx.profile = PatientProfile(name="Asha", age="34", phone="+91 98765 43210", location="Pune")


def _ids(ctx):
    return [m.id for m in ctx.messages]


# ----------------------------------------------------------------------
# Opening a session
# ----------------------------------------------------------------------


def test_new_device_starts_intake_silently(dispatcher, ctx, speech):
    asyncio.run(dispatcher.open(ctx))

    assert ctx.intake.stage == IntakeStage.AWAITING_NAME
    messages = list(ctx.messages)
    assert len(messages) == 1
    assert messages[0].role == Role.ASSISTANT
    assert messages[0].audio is None
    assert speech.synthesize_calls == []


def test_returning_device_skips_intake(dispatcher, ctx, store):
    store.save_language("device-1", "ta-IN")
    store.save_profile("device-1", PatientProfile(name="Kumar", age="40", phone="123"))

    asyncio.run(dispatcher.open(ctx))

    assert ctx.language == "ta-IN"
    assert ctx.intake.stage == IntakeStage.INACTIVE
    assert ctx.profile.name == "Kumar"
    [welcome] = list(ctx.messages)
    assert "Kumar" in welcome.text


# ----------------------------------------------------------------------
# Intake routing
# ----------------------------------------------------------------------


def test_intake_turns_never_reach_analysis(dispatcher, ctx, analyzer, store):
    asyncio.run(dispatcher.open(ctx))

    for answer in ["Asha", "34", "+91 98765 43210", "Pune"]:
        outcome = asyncio.run(dispatcher.submit(ctx, TextTurn(answer)))
        assert outcome.status == DispatchStatus.INTAKE

    assert analyzer.calls == []
    assert ctx.intake.stage == IntakeStage.COMPLETE
    assert ctx.profile == PatientProfile(name="Asha", age="34", phone="+91 98765 43210", location="Pune")
    assert store.load_profile("device-1") == ctx.profile
    # opening + four (answer, prompt) pairs
    assert len(ctx.messages) == 9
    assert list(ctx.messages)[-1].text.startswith("Thank you, Asha.")
    assert ctx.busy is False


def test_intake_prompt_is_voiced_and_played(dispatcher, ctx, speech):
    asyncio.run(dispatcher.open(ctx))
    asyncio.run(dispatcher.submit(ctx, TextTurn("Asha")))

    prompt = list(ctx.messages)[-1]
    assert prompt.text == "Thank you. What is your age?"
    assert prompt.audio is not None
    assert ctx.playback.now_playing == prompt.audio
    assert speech.synthesize_calls == [("Thank you. What is your age?", "en-US")]


def test_intake_prompt_survives_speech_failure(dispatcher, ctx, speech):
    speech.fail_synthesize = True
    asyncio.run(dispatcher.open(ctx))
    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("Asha")))

    assert outcome.status == DispatchStatus.INTAKE
    prompt = list(ctx.messages)[-1]
    assert prompt.text == "Thank you. What is your age?"
    assert prompt.audio is None
    assert ctx.notices == []
    assert ctx.busy is False


def test_blank_turns_are_ignored(dispatcher, ctx, analyzer):
    asyncio.run(dispatcher.open(ctx))
    before = _ids(ctx)

    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("   ")))
    assert outcome.status == DispatchStatus.IGNORED
    assert _ids(ctx) == before
    assert ctx.intake.stage == IntakeStage.AWAITING_NAME

    _finish_intake(ctx)
    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("")))
    assert outcome.status == DispatchStatus.IGNORED
    assert analyzer.calls == []


def test_intake_text_answer_keeps_attached_image(dispatcher, ctx, analyzer):
    asyncio.run(dispatcher.open(ctx))

    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("Asha", image="data:image/png;base64,AA==")))

    assert outcome.status == DispatchStatus.INTAKE
    user = [m for m in ctx.messages if m.role == Role.USER]
    assert [(m.text, m.image) for m in user] == [("Asha", "data:image/png;base64,AA==")]
    assert ctx.intake.draft.name == "Asha"
    assert analyzer.calls == []


def test_voice_answer_during_intake_is_transcribed_not_analyzed(dispatcher, ctx, analyzer, speech):
    speech.transcript = "Asha"
    asyncio.run(dispatcher.open(ctx))

    outcome = asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert outcome.status == DispatchStatus.INTAKE
    assert analyzer.calls == []
    assert ctx.intake.stage == IntakeStage.AWAITING_AGE
    assert ctx.intake.draft.name == "Asha"
    user = [m for m in ctx.messages if m.role == Role.USER]
    assert [m.text for m in user] == ["Asha"]


def test_failed_voice_answer_during_intake_leaves_no_trace(dispatcher, ctx, speech):
    speech.fail_transcribe = True
    asyncio.run(dispatcher.open(ctx))
    before = _ids(ctx)

    outcome = asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert outcome.status == DispatchStatus.FAILED
    assert _ids(ctx) == before
    assert ctx.intake.stage == IntakeStage.AWAITING_NAME
    assert [n.description for n in ctx.notices] == [
        "Sorry, I could not process your voice message. Please try again."
    ]


# ----------------------------------------------------------------------
# Chat routing
# ----------------------------------------------------------------------


def test_text_turn_gets_one_analysis_and_reply(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    ctx.messages.append(Message(role=Role.ASSISTANT, text="Welcome back"))

    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("I have a fever", image="data:image/png;base64,AA==")))

    assert outcome.status == DispatchStatus.ANSWERED
    assert len(analyzer.calls) == 1
    call = analyzer.calls[0]
    assert call["symptoms"] == "I have a fever"
    assert call["language"] == "en-US"
    assert call["chat_history"] == "assistant: Welcome back"
    assert call["image_data_uri"] == "data:image/png;base64,AA=="
    assert json.loads(call["patient_details"])["name"] == "Asha"

    user, reply = list(ctx.messages)[-2:]
    assert user.role == Role.USER and user.text == "I have a fever"
    assert user.image == "data:image/png;base64,AA=="
    assert reply.role == Role.ASSISTANT and reply.text == FLU_REPLY
    assert reply.audio == REPLY_AUDIO
    assert outcome.message_id == reply.id

    assert ctx.diagnosis_available is True
    assert ctx.busy is False
    assert ctx.playback.now_playing == REPLY_AUDIO


def test_reply_without_audio_is_still_shown(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    analyzer.audio = None

    asyncio.run(dispatcher.submit(ctx, TextTurn("I have a fever")))

    reply = list(ctx.messages)[-1]
    assert reply.text == FLU_REPLY
    assert reply.audio is None
    assert ctx.playback.now_playing is None
    assert ctx.diagnosis_available is True


def test_failed_text_turn_reports_and_clears_busy(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    analyzer.fail = True

    outcome = asyncio.run(dispatcher.submit(ctx, TextTurn("I have a fever")))

    assert outcome.status == DispatchStatus.FAILED
    assert [m.role for m in ctx.messages] == [Role.USER]
    assert ctx.busy is False
    assert ctx.diagnosis_available is False
    [notice] = ctx.drain_notices()
    assert notice.title == "Error"
    assert notice.variant == "destructive"


def test_voice_placeholder_is_replaced_in_place(dispatcher, ctx, speech):
    _finish_intake(ctx)
    ctx.messages.append(Message(role=Role.ASSISTANT, text="Welcome back"))

    outcome = asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert outcome.status == DispatchStatus.ANSWERED
    welcome, user, reply = list(ctx.messages)
    assert user.text == "I have a fever"
    assert user.audio == VOICE_AUDIO
    assert reply.text == FLU_REPLY
    assert speech.transcribe_calls == [(VOICE_AUDIO, "en-US")]


def test_voice_turn_history_excludes_placeholder(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    ctx.messages.append(Message(role=Role.ASSISTANT, text="Welcome back"))

    asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert analyzer.calls[0]["chat_history"] == "assistant: Welcome back"
    assert analyzer.calls[0]["symptoms"] == "I have a fever"


def test_failed_transcription_restores_log(dispatcher, ctx, speech, analyzer):
    _finish_intake(ctx)
    ctx.messages.append(Message(role=Role.ASSISTANT, text="Welcome back"))
    ctx.messages.append(Message(role=Role.USER, text="headache"))
    before = _ids(ctx)
    speech.fail_transcribe = True

    outcome = asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert outcome.status == DispatchStatus.FAILED
    assert _ids(ctx) == before
    assert analyzer.calls == []
    assert ctx.busy is False


def test_failed_analysis_after_transcription_removes_placeholder(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    before = _ids(ctx)
    analyzer.fail = True

    outcome = asyncio.run(dispatcher.submit(ctx, VoiceTurn(audio=VOICE_AUDIO)))

    assert outcome.status == DispatchStatus.FAILED
    assert _ids(ctx) == before
    assert ctx.busy is False
    assert len(ctx.notices) == 1


def test_diagnosis_flag_is_monotonic_until_restart(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    asyncio.run(dispatcher.submit(ctx, TextTurn("I have a fever")))
    assert ctx.diagnosis_available is True

    analyzer.fail = True
    asyncio.run(dispatcher.submit(ctx, TextTurn("still feverish")))
    assert ctx.diagnosis_available is True

    asyncio.run(dispatcher.restart(ctx, "en-US", play_audio=False))
    assert ctx.diagnosis_available is False


# ----------------------------------------------------------------------
# Restart
# ----------------------------------------------------------------------


def test_restart_resets_session_and_persisted_profile(dispatcher, ctx, store):
    store.save_profile("device-1", PatientProfile(name="Asha", age="34", phone="1"))
    _finish_intake(ctx)
    ctx.messages.append(Message(role=Role.USER, text="hello"))
    ctx.pending_image = "data:image/png;base64,AA=="
    ctx.playback.play(REPLY_AUDIO)
    generation = ctx.generation

    asyncio.run(dispatcher.restart(ctx, "bn-IN"))

    assert ctx.generation == generation + 1
    assert ctx.language == "bn-IN"
    assert store.load_language("device-1") == "bn-IN"
    assert store.load_profile("device-1") is None
    assert ctx.profile is None
    assert ctx.pending_image is None
    assert ctx.intake.stage == IntakeStage.AWAITING_NAME
    [opening] = list(ctx.messages)
    assert "সেবাসেতু" in opening.text
    assert opening.audio is not None
    assert ctx.playback.now_playing == opening.audio


def test_restart_while_analysis_in_flight_discards_result(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    analyzer.hold = True

    async def scenario():
        task = asyncio.create_task(dispatcher.submit(ctx, TextTurn("I have a fever")))
        while analyzer.started is None or not analyzer.started.is_set():
            await asyncio.sleep(0)

        await dispatcher.restart(ctx, "hi-IN", play_audio=False)
        after_restart = _ids(ctx)

        analyzer.release.set()
        outcome = await task
        return after_restart, outcome

    after_restart, outcome = asyncio.run(scenario())

    assert outcome.status == DispatchStatus.STALE
    assert len(after_restart) == 1
    assert _ids(ctx) == after_restart
    assert ctx.diagnosis_available is False
    assert ctx.busy is False
    assert ctx.playback.now_playing is None
    assert ctx.notices == []


def test_stale_failure_does_not_notify(dispatcher, ctx, analyzer):
    _finish_intake(ctx)
    analyzer.hold = True
    analyzer.fail = True

    async def scenario():
        task = asyncio.create_task(dispatcher.submit(ctx, TextTurn("I have a fever")))
        while analyzer.started is None or not analyzer.started.is_set():
            await asyncio.sleep(0)
        await dispatcher.restart(ctx, "en-US", play_audio=False)
        analyzer.release.set()
        return await task

    outcome = asyncio.run(scenario())

    assert outcome.status == DispatchStatus.STALE
    assert ctx.notices == []
    assert len(ctx.messages) == 1


def _restart_mid_turn(dispatcher, ctx, held, turn):
    """Submit `turn`, restart while `held` is blocked, then let it finish."""

    async def scenario():
        task = asyncio.create_task(dispatcher.submit(ctx, turn))
        while held.started is None or not held.started.is_set():
            await asyncio.sleep(0)

        await dispatcher.restart(ctx, "ta-IN", play_audio=False)
        after_restart = _ids(ctx)

        held.release.set()
        outcome = await task
        return after_restart, outcome

    return asyncio.run(scenario())


@pytest.mark.parametrize("fail", [False, True])
def test_restart_during_transcription_discards_voice_turn(dispatcher, ctx, speech, analyzer, fail):
    _finish_intake(ctx)
    speech.hold_transcribe = True
    speech.fail_transcribe = fail

    after_restart, outcome = _restart_mid_turn(dispatcher, ctx, speech, VoiceTurn(audio=VOICE_AUDIO))

    assert outcome.status == DispatchStatus.STALE
    assert len(after_restart) == 1
    assert _ids(ctx) == after_restart
    assert analyzer.calls == []
    assert ctx.notices == []
    assert ctx.busy is False


@pytest.mark.parametrize("fail", [False, True])
def test_restart_during_voice_analysis_discards_reply(dispatcher, ctx, analyzer, fail):
    _finish_intake(ctx)
    analyzer.hold = True
    analyzer.fail = fail

    after_restart, outcome = _restart_mid_turn(dispatcher, ctx, analyzer, VoiceTurn(audio=VOICE_AUDIO))

    assert outcome.status == DispatchStatus.STALE
    assert _ids(ctx) == after_restart
    assert [m.role for m in ctx.messages] == [Role.ASSISTANT]
    assert ctx.diagnosis_available is False
    assert ctx.notices == []
    assert ctx.busy is False


def test_restart_during_intake_transcription_keeps_fresh_intake(dispatcher, ctx, speech):
    asyncio.run(dispatcher.open(ctx))
    speech.transcript = "Asha"
    speech.hold_transcribe = True

    after_restart, outcome = _restart_mid_turn(dispatcher, ctx, speech, VoiceTurn(audio=VOICE_AUDIO))

    assert outcome.status == DispatchStatus.STALE
    assert _ids(ctx) == after_restart
    assert ctx.intake.stage == IntakeStage.AWAITING_NAME
    assert ctx.intake.draft.name is None


def test_speak_instructions_plays_requested_language(dispatcher, ctx, speech):
    asyncio.run(dispatcher.speak_instructions(ctx, "mr-IN"))

    [(text, language)] = speech.synthesize_calls
    assert language == "mr-IN"
    assert text.startswith("तुमची लक्षणे")
    assert ctx.playback.is_playing


def test_speak_instructions_failure_is_quiet(dispatcher, ctx, speech):
    speech.fail_synthesize = True
    asyncio.run(dispatcher.speak_instructions(ctx, "en-US"))
    assert ctx.playback.is_playing is False
    assert ctx.notices == []

# sevasetu/intake/agent.py
from __future__ import annotations

from typing import Dict

from sevasetu.errors import BlankAnswerError
from sevasetu.i18n import translate
from sevasetu.intake.state import IntakeState, IntakeStep
from sevasetu.intake.stages import IntakeStage


class IntakeAgent:
    """
    IntakeAgent walks a new patient through the onboarding questions.

    Stages, in order:
      - name
      - age
      - phone
      - location
      - complete

    Each answer fills exactly the field of the stage it was given in. The
    agent is pure: persistence of the completed profile is left to the
    caller, which receives it as `profile_update`.
    """

    NEXT_STAGE: Dict[IntakeStage, IntakeStage] = {
        IntakeStage.AWAITING_NAME: IntakeStage.AWAITING_AGE,
        IntakeStage.AWAITING_AGE: IntakeStage.AWAITING_PHONE,
        IntakeStage.AWAITING_PHONE: IntakeStage.AWAITING_LOCATION,
        IntakeStage.AWAITING_LOCATION: IntakeStage.COMPLETE,
    }

    # Translation key of the question asked when entering a stage.
    PROMPT_KEYS: Dict[IntakeStage, str] = {
        IntakeStage.AWAITING_NAME: "askName",
        IntakeStage.AWAITING_AGE: "askAge",
        IntakeStage.AWAITING_PHONE: "askPhone",
        IntakeStage.AWAITING_LOCATION: "askLocation",
    }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, language: str) -> tuple[IntakeState, str]:
        """
        Initialise a fresh intake and return:
          - initial state (awaiting name, empty draft)
          - the opening message to show to the patient
        """
        state = IntakeState(stage=IntakeStage.AWAITING_NAME)
        welcome = translate(language, "welcomeMessage")
        ask_name = translate(language, "askName")
        return state, f"{welcome}\n\n{ask_name}"

    def restart(self, language: str) -> tuple[IntakeState, str]:
        # Draft fields are dropped along with the old state object.
        return self.start(language)

    def advance(self, state: IntakeState, answer: str, language: str) -> IntakeStep:
        """
        Record `answer` for the current stage and move one stage forward.

        Finished or inactive intakes are left untouched and produce no prompt.
        Raises BlankAnswerError for answers that are empty once trimmed.
        """
        if not state.is_active:
            return IntakeStep(state=state, prompt=None)

        value = answer.strip()
        if not value:
            raise BlankAnswerError(f"Empty answer for {state.stage.value}")

        draft = state.draft.with_field(state.stage.field, value)
        next_stage = self.NEXT_STAGE[state.stage]
        new_state = IntakeState(stage=next_stage, draft=draft)

        if next_stage == IntakeStage.COMPLETE:
            profile = draft.to_profile()
            prompt = translate(language, "thanksPatientDetails", name=profile.name)
            return IntakeStep(state=new_state, prompt=prompt, profile_update=profile)

        return IntakeStep(state=new_state, prompt=self._question_for(next_stage, language))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _question_for(self, stage: IntakeStage, language: str) -> str:
        return translate(language, self.PROMPT_KEYS[stage])

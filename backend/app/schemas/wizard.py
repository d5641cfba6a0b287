"""
Profile Wizard Pydantic Schemas
"""

from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.job import CamelModel
from app.services.profile_wizard import Question, WizardMachine, WizardState


class AnswerRequest(CamelModel):
    """One answer to the current wizard question."""

    value: str = Field("", max_length=2000, description="Typed text or the chosen option")


class QuestionResponse(CamelModel):
    key: str
    kind: Literal["input", "options", "textarea"]
    text: str
    options: List[str] = Field(default_factory=list)
    skippable: bool = False
    placeholder: Optional[str] = None

    @classmethod
    def from_question(cls, question: Question) -> "QuestionResponse":
        return cls(
            key=question.key,
            kind=question.kind,
            text=question.text,
            options=list(question.options),
            skippable=question.skippable,
            placeholder=question.placeholder,
        )


class WizardSessionResponse(CamelModel):
    """A wizard session as seen by the chat client."""

    session_id: str = Field(..., description="Wizard session ID")
    state: WizardState
    progress: int = Field(..., ge=0, le=100, description="Completed share of questions, percent")
    current_question: Optional[QuestionResponse] = Field(
        None, description="The question being asked, absent once all answers are in"
    )

    @classmethod
    def build(cls, session_id: str, state: WizardState, machine: WizardMachine) -> "WizardSessionResponse":
        question = machine.current_question(state)
        return cls(
            session_id=session_id,
            state=state,
            progress=machine.progress_percent(state),
            current_question=QuestionResponse.from_question(question) if question else None,
        )

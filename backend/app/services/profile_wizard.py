"""
Profile Wizard State Machine

The chat-style form that turns a job seeker's answers into a job post.
Everything here is pure: ``WizardMachine.transition`` maps a state and an
event to a new state plus a list of effects (start a typing delay, submit the
profile). Running the effects is the caller's job, see
``app.services.wizard_service``.
"""

from dataclasses import dataclass, field
from typing import Annotated, Callable, Dict, List, Literal, Optional, Tuple, Union

from pydantic import Field

from app.core.exceptions import InvalidAnswerException, WizardStateException
from app.schemas.job import (
    CamelModel,
    LOCATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
)
from app.utils.phone import is_valid_mobile

AnswerValidator = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class Question:
    """One wizard step. ``validator`` returns an error message or None."""

    key: str
    kind: Literal["input", "options", "textarea"]
    text: str
    options: Tuple[str, ...] = ()
    skippable: bool = False
    placeholder: Optional[str] = None
    max_length: Optional[int] = None
    validator: Optional[AnswerValidator] = field(default=None, compare=False)


def min_length(minimum: int) -> AnswerValidator:
    def validate(value: str) -> Optional[str]:
        if len(value) < minimum:
            return f"Please write at least {minimum} characters."
        return None
    return validate


def malaysian_mobile(value: str) -> Optional[str]:
    if not is_valid_mobile(value):
        return "Please enter a valid Malaysian phone number (e.g. 0123456789)."
    return None


def build_questions(skills_min_length: int = 10) -> Tuple[Question, ...]:
    return (
        Question("name", "input", "Hi! What's your name?", skippable=True,
                 max_length=NAME_MAX_LENGTH),
        Question("age", "options", "How old are you?",
                 options=("18-25", "26-35", "36-45", "46-55", "55+")),
        Question("visa", "options", "What type of visa do you have?",
                 options=("Work Permit", "Student Visa", "Dependent Pass", "Other")),
        Question("nationality", "options", "Where are you from?",
                 options=("Bangladesh", "Nepal", "India", "Pakistan", "Myanmar",
                          "Indonesia", "Philippines", "Other")),
        Question("experience", "options", "How much work experience do you have?",
                 options=("No experience", "1-2 years", "3-5 years", "5-10 years", "10+ years")),
        Question("job", "options", "What kind of job are you looking for?",
                 options=("Factory Worker", "Restaurant/Kitchen Helper", "Cleaner/Housekeeper",
                          "Construction Worker", "Security Guard", "Driver",
                          "Technician/Mechanic", "General Worker", "Other")),
        Question("skills", "textarea", "Tell employers about your skills and experience.",
                 validator=min_length(skills_min_length)),
        Question("phone", "input", "What's your phone number? Employers will ask before seeing it.",
                 placeholder="e.g. 0123456789", max_length=PHONE_MAX_LENGTH,
                 validator=malaysian_mobile),
        Question("location", "input", "Where in Malaysia do you want to work?",
                 placeholder="e.g. Kuala Lumpur", max_length=LOCATION_MAX_LENGTH),
    )


# Transcript entries

class PromptEntry(CamelModel):
    kind: Literal["prompt"] = "prompt"
    question_key: str
    text: str


class AnswerEntry(CamelModel):
    kind: Literal["answer"] = "answer"
    question_key: str
    value: str


class InputRequestEntry(CamelModel):
    kind: Literal["input"] = "input"
    question_key: str
    multiline: bool = False
    placeholder: Optional[str] = None
    skippable: bool = False


class OptionsRequestEntry(CamelModel):
    kind: Literal["options"] = "options"
    question_key: str
    options: List[str]


class TypingEntry(CamelModel):
    kind: Literal["typing"] = "typing"


class LoadingEntry(CamelModel):
    kind: Literal["loading"] = "loading"


class SuccessEntry(CamelModel):
    kind: Literal["success"] = "success"
    job_id: str


class FailureEntry(CamelModel):
    kind: Literal["failure"] = "failure"
    reason: str


TranscriptEntry = Annotated[
    Union[
        PromptEntry, AnswerEntry, InputRequestEntry, OptionsRequestEntry,
        TypingEntry, LoadingEntry, SuccessEntry, FailureEntry,
    ],
    Field(discriminator="kind"),
]

AFFORDANCE_KINDS = ("input", "options")


class WizardState(CamelModel):
    """Current step index, answers so far and the append-only transcript."""

    step: int = 0
    answers: Dict[str, str] = Field(default_factory=dict)
    transcript: List[TranscriptEntry] = Field(default_factory=list)
    finished: bool = False

    @property
    def last_entry(self):
        return self.transcript[-1] if self.transcript else None

    @property
    def awaiting_answer(self) -> bool:
        return self.last_entry is not None and self.last_entry.kind in AFFORDANCE_KINDS

    def has_entry(self, kind: str) -> bool:
        return any(entry.kind == kind for entry in self.transcript)


# Events

@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class SubmitAnswer:
    value: str


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class TypingElapsed:
    pass


@dataclass(frozen=True)
class SubmissionSucceeded:
    job_id: str


@dataclass(frozen=True)
class SubmissionFailed:
    reason: str


@dataclass(frozen=True)
class Retry:
    pass


WizardEvent = Union[Start, SubmitAnswer, Skip, TypingElapsed, SubmissionSucceeded, SubmissionFailed, Retry]


# Effects

@dataclass(frozen=True)
class ScheduleTyping:
    delay: float


@dataclass(frozen=True)
class SubmitProfile:
    record: Dict[str, str]


Effect = Union[ScheduleTyping, SubmitProfile]


class WizardMachine:
    """
    Transition function for the profile wizard.

    Invalid answers raise ``InvalidAnswerException`` and events that do not
    fit the current state raise ``WizardStateException``; in both cases the
    input state is left untouched.
    """

    def __init__(
        self,
        questions: Optional[Tuple[Question, ...]] = None,
        typing_delay: float = 1.0,
        anonymous_name: str = "Anonymous"
    ):
        self.questions = questions or build_questions()
        self.typing_delay = typing_delay
        self.anonymous_name = anonymous_name

    def __len__(self) -> int:
        return len(self.questions)

    def initial_state(self) -> WizardState:
        state, _ = self.transition(WizardState(), Start())
        return state

    def current_question(self, state: WizardState) -> Optional[Question]:
        if state.step >= len(self.questions):
            return None
        return self.questions[state.step]

    def progress_percent(self, state: WizardState) -> int:
        return round(state.step / len(self.questions) * 100)

    def transition(self, state: WizardState, event: WizardEvent) -> Tuple[WizardState, List[Effect]]:
        if isinstance(event, Start):
            return self._start(state)
        if isinstance(event, SubmitAnswer):
            return self._answer(state, event.value)
        if isinstance(event, Skip):
            return self._skip(state)
        if isinstance(event, TypingElapsed):
            return self._show_next_prompt(state)
        if isinstance(event, SubmissionSucceeded):
            return self._finish(state, SuccessEntry(job_id=event.job_id), finished=True)
        if isinstance(event, SubmissionFailed):
            return self._finish(state, FailureEntry(reason=event.reason), finished=False)
        if isinstance(event, Retry):
            return self._retry(state)
        raise WizardStateException(f"Unknown wizard event: {event!r}")

    # Transitions

    def _start(self, state: WizardState) -> Tuple[WizardState, List[Effect]]:
        if state.transcript:
            raise WizardStateException("Wizard already started")
        question = self.questions[0]
        return WizardState(step=0, transcript=self._ask(question)), []

    def _answer(self, state: WizardState, raw_value: str) -> Tuple[WizardState, List[Effect]]:
        question = self._expect_answer(state)
        value = (raw_value or "").strip()

        if question.kind == "options":
            if value not in question.options:
                raise InvalidAnswerException(question.key, "Please choose one of the options.")
        else:
            if question.max_length is not None and len(value) > question.max_length:
                raise InvalidAnswerException(
                    question.key, f"Please use at most {question.max_length} characters."
                )
            if question.validator is not None:
                error = question.validator(value)
                if error:
                    raise InvalidAnswerException(question.key, error)
            if not value:
                if not question.skippable:
                    raise InvalidAnswerException(question.key, "This field is required.")
                value = self.anonymous_name

        return self._accept(state, question, value)

    def _skip(self, state: WizardState) -> Tuple[WizardState, List[Effect]]:
        question = self._expect_answer(state)
        if not question.skippable:
            raise WizardStateException(f"Question '{question.key}' cannot be skipped")
        return self._accept(state, question, self.anonymous_name)

    def _accept(self, state: WizardState, question: Question, value: str) -> Tuple[WizardState, List[Effect]]:
        answers = {**state.answers, question.key: value}
        transcript = [entry for entry in state.transcript if entry.kind not in AFFORDANCE_KINDS]
        transcript.append(AnswerEntry(question_key=question.key, value=value))

        next_step = state.step + 1
        if next_step < len(self.questions):
            transcript.append(TypingEntry())
            new_state = WizardState(step=next_step, answers=answers, transcript=transcript)
            return new_state, [ScheduleTyping(self.typing_delay)]

        transcript.append(LoadingEntry())
        new_state = WizardState(step=next_step, answers=answers, transcript=transcript)
        return new_state, [SubmitProfile(record=dict(answers))]

    def _show_next_prompt(self, state: WizardState) -> Tuple[WizardState, List[Effect]]:
        # A timer that fires after its typing indicator is gone changes nothing
        if not state.has_entry("typing"):
            return state, []
        question = self.questions[state.step]
        transcript = [entry for entry in state.transcript if entry.kind != "typing"]
        transcript.extend(self._ask(question))
        return state.model_copy(update={"transcript": transcript}), []

    def _finish(self, state: WizardState, outcome, finished: bool) -> Tuple[WizardState, List[Effect]]:
        if not state.has_entry("loading"):
            raise WizardStateException("No profile submission is in progress")
        transcript = [entry for entry in state.transcript if entry.kind != "loading"]
        transcript.append(outcome)
        return state.model_copy(update={"transcript": transcript, "finished": finished}), []

    def _retry(self, state: WizardState) -> Tuple[WizardState, List[Effect]]:
        if state.last_entry is None or state.last_entry.kind != "failure":
            raise WizardStateException("Nothing to retry")
        transcript = state.transcript[:-1] + [LoadingEntry()]
        new_state = state.model_copy(update={"transcript": transcript})
        return new_state, [SubmitProfile(record=dict(state.answers))]

    # Helpers

    def _expect_answer(self, state: WizardState) -> Question:
        if state.finished or not state.awaiting_answer:
            raise WizardStateException("No question is waiting for an answer")
        return self.questions[state.step]

    def _ask(self, question: Question) -> List[TranscriptEntry]:
        prompt = PromptEntry(question_key=question.key, text=question.text)
        if question.kind == "options":
            return [prompt, OptionsRequestEntry(question_key=question.key, options=list(question.options))]
        return [prompt, InputRequestEntry(
            question_key=question.key,
            multiline=question.kind == "textarea",
            placeholder=question.placeholder,
            skippable=question.skippable,
        )]


DEFAULT_MACHINE = WizardMachine()


def transition(state: WizardState, event: WizardEvent) -> Tuple[WizardState, List[Effect]]:
    """Apply ``event`` with the default question set."""
    return DEFAULT_MACHINE.transition(state, event)

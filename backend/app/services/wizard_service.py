"""
Profile Wizard Session Service

Drives ``WizardMachine`` for HTTP clients: keeps one wizard state per
session, persists it (Redis when available, otherwise process memory) and
runs the effects the machine asks for.
"""

import asyncio
import time
import uuid
import weakref
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, Optional, Protocol, Set, Tuple

import redis.asyncio as redis

from app.core.events import EventManager, EventNames
from app.core.exceptions import BaseApplicationException, WizardSessionNotFoundException
from app.services.job_service import JobService
from app.services.profile_wizard import (
    Effect,
    Retry,
    ScheduleTyping,
    Skip,
    SubmissionFailed,
    SubmissionSucceeded,
    SubmitAnswer,
    SubmitProfile,
    TypingElapsed,
    WizardEvent,
    WizardMachine,
    WizardState,
)
from app.utils.logger import get_logger, log_error

logger = get_logger(__name__)

Callback = Callable[[], Awaitable[None]]

SUBMISSION_FAILED_REASON = "We could not save your profile. Please try again."


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> None:
        ...


class AsyncioScheduler:
    """Runs delayed callbacks on the running event loop."""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def call_later(self, delay: float, callback: Callback) -> None:
        task = asyncio.create_task(self._run(delay, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, delay: float, callback: Callback) -> None:
        await asyncio.sleep(delay)
        try:
            await callback()
        except Exception as e:
            log_error(e, {"operation": "scheduled_wizard_callback"})

    async def shutdown(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()


class WizardSessionStore(ABC):
    """Storage for wizard states keyed by session id."""

    @abstractmethod
    async def load(self, session_id: str) -> Optional[WizardState]:
        pass

    @abstractmethod
    async def save(self, session_id: str, state: WizardState) -> None:
        pass


class InMemoryWizardSessionStore(WizardSessionStore):
    """Process-local wizard states with the same sliding TTL as Redis."""

    def __init__(self, ttl_seconds: int = 3600, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._states: Dict[str, Tuple[float, str]] = {}

    def __len__(self) -> int:
        return len(self._states)

    async def load(self, session_id: str) -> Optional[WizardState]:
        self._evict_expired()
        entry = self._states.get(session_id)
        return WizardState.model_validate_json(entry[1]) if entry else None

    async def save(self, session_id: str, state: WizardState) -> None:
        self._evict_expired()
        self._states[session_id] = (self.clock() + self.ttl_seconds, state.model_dump_json())

    def _evict_expired(self) -> None:
        now = self.clock()
        expired = [key for key, (expires_at, _) in self._states.items() if expires_at <= now]
        for key in expired:
            del self._states[key]


class RedisWizardSessionStore(WizardSessionStore):
    """Wizard states as JSON strings with a sliding TTL."""

    key_prefix = "wizard:session:"

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def load(self, session_id: str) -> Optional[WizardState]:
        payload = await self.client.get(self.key_prefix + session_id)
        return WizardState.model_validate_json(payload) if payload else None

    async def save(self, session_id: str, state: WizardState) -> None:
        await self.client.set(self.key_prefix + session_id, state.model_dump_json(), ex=self.ttl_seconds)


class WizardService:
    """Session-level operations behind the profile wizard endpoints."""

    def __init__(
        self,
        machine: WizardMachine,
        store: WizardSessionStore,
        job_service: JobService,
        event_manager: EventManager,
        scheduler: Scheduler
    ):
        self.machine = machine
        self.store = store
        self.job_service = job_service
        self.event_manager = event_manager
        self.scheduler = scheduler
        # Entries disappear once no dispatch holds the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    async def start(self) -> Tuple[str, WizardState]:
        session_id = uuid.uuid4().hex
        state = self.machine.initial_state()
        await self.store.save(session_id, state)

        await self.event_manager.emit(EventNames.WIZARD_STARTED, {"session_id": session_id})
        logger.info("Wizard session started", session_id=session_id)
        return session_id, state

    async def get(self, session_id: str) -> WizardState:
        state = await self.store.load(session_id)
        if state is None:
            raise WizardSessionNotFoundException(session_id)
        return state

    async def answer(self, session_id: str, value: str) -> WizardState:
        return await self.dispatch(session_id, SubmitAnswer(value))

    async def skip(self, session_id: str) -> WizardState:
        return await self.dispatch(session_id, Skip())

    async def retry(self, session_id: str) -> WizardState:
        return await self.dispatch(session_id, Retry())

    async def dispatch(self, session_id: str, event: WizardEvent) -> WizardState:
        """
        Apply one event to a session and run the resulting effects.

        The transition and save happen under a per-session lock. Effects run
        after the lock is released because a submission dispatches its own
        outcome event.

        Returns:
            WizardState: The session state after all effects completed
        """
        async with self._lock_for(session_id):
            state = await self.get(session_id)
            state, effects = self.machine.transition(state, event)
            await self.store.save(session_id, state)

        for effect in effects:
            state = await self._run_effect(session_id, effect) or state
        return state

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    async def _run_effect(self, session_id: str, effect: Effect) -> Optional[WizardState]:
        if isinstance(effect, ScheduleTyping):
            self.scheduler.call_later(effect.delay, lambda: self._typing_elapsed(session_id))
            return None
        if isinstance(effect, SubmitProfile):
            return await self._submit(session_id, effect.record)
        raise TypeError(f"Unhandled wizard effect: {effect!r}")

    async def _typing_elapsed(self, session_id: str) -> None:
        await self.dispatch(session_id, TypingElapsed())

    async def _submit(self, session_id: str, record: Dict[str, str]) -> WizardState:
        try:
            job = await self.job_service.create_job(record)
        except BaseApplicationException as e:
            log_error(e, {"operation": "wizard_submit", "session_id": session_id})
            return await self._submission_failed(session_id, e.user_message)
        except Exception as e:
            log_error(e, {"operation": "wizard_submit", "session_id": session_id})
            return await self._submission_failed(session_id, SUBMISSION_FAILED_REASON)

        state = await self.dispatch(session_id, SubmissionSucceeded(job.id))
        await self.event_manager.emit(EventNames.WIZARD_COMPLETED, {
            "session_id": session_id,
            "job_id": job.id,
        })
        logger.info("Wizard session completed", session_id=session_id, job_id=job.id)
        return state

    async def _submission_failed(self, session_id: str, reason: str) -> WizardState:
        state = await self.dispatch(session_id, SubmissionFailed(reason))
        await self.event_manager.emit(EventNames.WIZARD_FAILED, {
            "session_id": session_id,
            "reason": reason,
        })
        return state

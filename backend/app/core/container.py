"""
Simple Dependency Container

Builds the database manager, repositories, services and observers once at
startup and hands them to the API layer.
"""

from typing import Dict, Any, Optional

from app.core.config import Settings, get_settings
from app.core.database import DatabaseManager
from app.core.events import Event, EventManager, EventNames
from app.repositories.job_repository import JobRepository
from app.repositories.contact_request_repository import ContactRequestRepository
from app.services.job_service import JobService
from app.services.contact_request_service import ContactRequestService
from app.services.profile_wizard import WizardMachine, build_questions
from app.services.wizard_service import (
    AsyncioScheduler,
    InMemoryWizardSessionStore,
    RedisWizardSessionStore,
    Scheduler,
    WizardService,
)
from app.utils.logger import get_logger
from app.utils.metrics import JobBoardMetrics

logger = get_logger(__name__)


def log_event(event: Event) -> None:
    logger.info("Application event", event_name=event.name, data=event.data)


class SimpleContainer:
    """Simple dependency injection container."""

    def __init__(self):
        self._instances: Dict[str, Any] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(
        self,
        settings: Optional[Settings] = None,
        database_url: Optional[str] = None,
        scheduler: Optional[Scheduler] = None
    ):
        """
        Initialize container and dependencies.

        Args:
            settings: Settings to use instead of the environment
            database_url: Overrides ``settings.DATABASE_URL``
            scheduler: Timer used for the wizard typing delay
        """
        if self._initialized:
            return

        logger.info("Initializing application container...")

        settings = settings or get_settings()
        self._instances['settings'] = settings

        db_manager = DatabaseManager(database_url=database_url or settings.DATABASE_URL,
                                     redis_url=settings.REDIS_URL)
        await db_manager.init_database()
        await db_manager.create_tables()
        self._instances['db_manager'] = db_manager

        event_manager = EventManager()
        metrics = JobBoardMetrics()
        metrics.subscribe(event_manager)
        for name in (
            EventNames.JOB_CREATED,
            EventNames.CONTACT_REQUEST_SUBMITTED,
            EventNames.CONTACT_REQUEST_STATUS_CHANGED,
        ):
            event_manager.subscribe(name, log_event)
        self._instances['event_manager'] = event_manager
        self._instances['metrics'] = metrics

        job_repo = JobRepository(db_manager)
        request_repo = ContactRequestRepository(db_manager)
        job_service = JobService(job_repo, event_manager, settings)
        self._instances['job_service'] = job_service
        self._instances['contact_request_service'] = ContactRequestService(
            request_repo, job_repo, event_manager
        )

        if db_manager.redis is not None:
            store = RedisWizardSessionStore(db_manager.redis, settings.WIZARD_SESSION_TTL_SECONDS)
        else:
            store = InMemoryWizardSessionStore(settings.WIZARD_SESSION_TTL_SECONDS)
        machine = WizardMachine(
            questions=build_questions(settings.SKILLS_MIN_LENGTH),
            typing_delay=settings.WIZARD_TYPING_DELAY_SECONDS,
            anonymous_name=settings.ANONYMOUS_NAME,
        )
        self._instances['scheduler'] = scheduler or AsyncioScheduler()
        self._instances['wizard_service'] = WizardService(
            machine, store, job_service, event_manager, self._instances['scheduler']
        )

        self._initialized = True
        logger.info("Container initialized successfully", wizard_store=type(store).__name__)

    async def shutdown(self):
        """Shutdown container and cleanup resources."""
        logger.info("Shutting down container...")

        scheduler = self._instances.get('scheduler')
        if isinstance(scheduler, AsyncioScheduler):
            await scheduler.shutdown()

        if 'db_manager' in self._instances:
            await self._instances['db_manager'].close_connections()

        self._instances.clear()
        self._initialized = False
        logger.info("Container shutdown complete")

    def get(self, name: str) -> Any:
        """Get dependency by name."""
        if not self._initialized:
            raise RuntimeError("Container not initialized. Call init_container() first.")
        return self._instances[name]


# Global container instance
container = SimpleContainer()


async def init_container(**kwargs):
    """Initialize the global container."""
    await container.initialize(**kwargs)


async def shutdown_container():
    """Shutdown the global container."""
    await container.shutdown()


def get_container() -> SimpleContainer:
    """Get the global container instance."""
    return container

"""
Test Configuration for Xpat Jobs

Fixtures build every layer against a throwaway SQLite file so concurrent
sessions behave like they do on a real database.
"""

import os

os.environ.setdefault("TESTING", "true")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.config import Settings
from app.core.container import container
from app.core.database import DatabaseManager
from app.core.events import EventManager
from app.repositories.job_repository import JobRepository
from app.repositories.contact_request_repository import ContactRequestRepository
from app.services.job_service import JobService
from app.services.contact_request_service import ContactRequestService
from app.services.profile_wizard import WizardMachine
from app.services.wizard_service import InMemoryWizardSessionStore, WizardService
from app.utils.job_board import now_ms


class ManualScheduler:
    """Collects delayed callbacks until the test fires them."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    async def run_pending(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            await callback()


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, TESTING=True, REDIS_URL=None, WIZARD_TYPING_DELAY_SECONDS=0.5)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def db_manager(database_url):
    manager = DatabaseManager(database_url=database_url, redis_url="")
    await manager.init_database()
    await manager.create_tables()
    yield manager
    await manager.close_connections()


@pytest.fixture
def event_manager():
    return EventManager()


@pytest.fixture
def job_repo(db_manager):
    return JobRepository(db_manager)


@pytest.fixture
def request_repo(db_manager):
    return ContactRequestRepository(db_manager)


@pytest.fixture
def job_service(job_repo, event_manager, test_settings):
    return JobService(job_repo, event_manager, test_settings)


@pytest.fixture
def contact_service(request_repo, job_repo, event_manager):
    return ContactRequestService(request_repo, job_repo, event_manager)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def wizard_machine(test_settings):
    return WizardMachine(typing_delay=test_settings.WIZARD_TYPING_DELAY_SECONDS)


@pytest.fixture
def wizard_service(wizard_machine, job_service, event_manager, scheduler):
    return WizardService(
        wizard_machine, InMemoryWizardSessionStore(), job_service, event_manager, scheduler
    )


@pytest.fixture
def sample_profile():
    return {
        "name": "Rahim Uddin",
        "age": "26-35",
        "visa": "Work Permit",
        "nationality": "Bangladesh",
        "experience": "3-5 years",
        "job": "Factory Worker",
        "skills": "Forklift operation and machine maintenance",
        "phone": "0123456789",
        "location": "Shah Alam",
    }


@pytest_asyncio.fixture
async def sample_job(job_service, sample_profile):
    return await job_service.create_job(sample_profile, now=now_ms())


@pytest_asyncio.fixture
async def test_client(test_settings, database_url, scheduler):
    """HTTP client against the app with the global container on the test database."""
    from app.main import app

    await container.initialize(settings=test_settings, database_url=database_url, scheduler=scheduler)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    await container.shutdown()

"""
Product metrics for Xpat Jobs.

Prometheus counters tracking the board funnel: profiles created, profile
views, contact requests and their resolutions, wizard sessions.
"""

from prometheus_client import Counter, CollectorRegistry, generate_latest
from typing import Optional

from app.core.events import Event, EventManager, EventNames


class JobBoardMetrics:
    """Central metrics collection for the job board."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """Initialize metrics with optional custom registry."""
        self.registry = registry or CollectorRegistry()

        self.profiles_created_total = Counter(
            'profiles_created_total',
            'Job seeker profiles posted to the board',
            ['job_category'],
            registry=self.registry
        )

        self.job_views_total = Counter(
            'job_views_total',
            'Profile detail views on the board',
            registry=self.registry
        )

        self.contact_requests_total = Counter(
            'contact_requests_total',
            'Contact requests submitted by employers',
            registry=self.registry
        )

        self.contact_request_resolutions_total = Counter(
            'contact_request_resolutions_total',
            'Contact requests approved or rejected by job seekers',
            ['status'],
            registry=self.registry
        )

        self.wizard_sessions_total = Counter(
            'wizard_sessions_total',
            'Profile wizard sessions by outcome',
            ['outcome'],
            registry=self.registry
        )

    def record_profile_created(self, job_category: str):
        self.profiles_created_total.labels(job_category=job_category or 'unknown').inc()

    def record_job_view(self):
        self.job_views_total.inc()

    def record_contact_request(self):
        self.contact_requests_total.inc()

    def record_resolution(self, status: str):
        self.contact_request_resolutions_total.labels(status=status).inc()

    def record_wizard_session(self, outcome: str):
        """Record a wizard session outcome (started, completed, failed)."""
        self.wizard_sessions_total.labels(outcome=outcome).inc()

    def subscribe(self, events: EventManager) -> None:
        """Feed the counters from service events."""
        events.subscribe(
            EventNames.JOB_CREATED,
            lambda event: self.record_profile_created(event.data.get("job"))
        )
        events.subscribe(EventNames.JOB_VIEWED, lambda event: self.record_job_view())
        events.subscribe(
            EventNames.CONTACT_REQUEST_SUBMITTED,
            lambda event: self.record_contact_request()
        )
        events.subscribe(
            EventNames.CONTACT_REQUEST_STATUS_CHANGED,
            lambda event: self.record_resolution(event.data["status"])
        )
        for name, outcome in (
            (EventNames.WIZARD_STARTED, "started"),
            (EventNames.WIZARD_COMPLETED, "completed"),
            (EventNames.WIZARD_FAILED, "failed"),
        ):
            events.subscribe(name, self._wizard_handler(outcome))

    def _wizard_handler(self, outcome: str):
        def handler(event: Event) -> None:
            self.record_wizard_session(outcome)
        return handler

    def get_metrics(self) -> str:
        """Get current metrics in Prometheus format."""
        return generate_latest(self.registry).decode('utf-8')

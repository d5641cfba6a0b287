"""
Job Board Helpers

Pure functions behind the board listing: category/search filtering and the
display-only expiry countdown. Expiry is always derived from the creation
timestamp and never stored.
"""

import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Protocol

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

LISTING_TTL_DAYS = 7
EXPIRING_SOON_DAYS = 2

ALL_CATEGORIES = "all"

JOB_CATEGORIES = [
    "Factory Worker",
    "Restaurant/Kitchen Helper",
    "Cleaner/Housekeeper",
    "Construction Worker",
    "Security Guard",
    "Driver",
    "Technician/Mechanic",
    "Packing/Warehouse",
    "General Worker",
]


class ListedJob(Protocol):
    name: str
    skills: str
    location: str
    nationality: str
    job: str
    timestamp: int


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def listing_cutoff(now: int, ttl_days: int = LISTING_TTL_DAYS) -> int:
    """Oldest timestamp still shown on the board."""
    return now - ttl_days * MS_PER_DAY


def matches_category(job: ListedJob, category: Optional[str]) -> bool:
    if not category or category.lower() == ALL_CATEGORIES:
        return True
    return job.job == category


def matches_search(job: ListedJob, search: Optional[str]) -> bool:
    if not search:
        return True
    term = search.lower()
    return any(
        term in (value or "").lower()
        for value in (job.name, job.skills, job.location, job.nationality)
    )


def filter_jobs(
    jobs: Iterable[ListedJob],
    category: Optional[str] = ALL_CATEGORIES,
    search: Optional[str] = "",
) -> List[ListedJob]:
    """
    Filter board listings.

    Args:
        jobs: Jobs as returned by the active listing
        category: Exact job category, or "all" to skip the category filter
        search: Case-insensitive substring over name, skills, location, nationality

    Returns:
        List of matching jobs in their original order
    """
    return [
        job for job in jobs
        if matches_category(job, category) and matches_search(job, search)
    ]


def days_until_expiry(timestamp: int, now: int, ttl_days: int = LISTING_TTL_DAYS) -> int:
    expires_at = timestamp + ttl_days * MS_PER_DAY
    return max(0, math.ceil((expires_at - now) / MS_PER_DAY))


def is_expiring(
    timestamp: int,
    now: int,
    ttl_days: int = LISTING_TTL_DAYS,
    threshold_days: int = EXPIRING_SOON_DAYS,
) -> bool:
    return days_until_expiry(timestamp, now, ttl_days) <= threshold_days


def format_time_ago(timestamp: int, now: int) -> str:
    """Human readable age of a listing, e.g. "3 hr ago"."""
    minutes = (now - timestamp) // MS_PER_MINUTE
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hr ago"
    days = hours // 24
    return f"{days} day{'s' if days > 1 else ''} ago"


def display_initials(name: Optional[str], anonymous_name: str = "Anonymous") -> Optional[str]:
    """Up to two initials for the avatar; None means show the generic avatar."""
    if not name or name == anonymous_name:
        return None
    return "".join(part[0] for part in name.split() if part).upper()[:2]


def is_same_day(timestamp: int, now: int) -> bool:
    posted = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).date()
    today = datetime.fromtimestamp(now / 1000, tz=timezone.utc).date()
    return posted == today

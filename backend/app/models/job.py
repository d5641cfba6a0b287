"""
Job Post Database Model

SQLAlchemy 2.0 model for the job seeker profiles shown on the board.
"""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String, Text, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class JobPost(Base):
    """
    Job seeker profile created by the profile wizard.

    ``timestamp`` is written once at creation (epoch milliseconds) and
    ``views`` only ever grows through an atomic increment.
    """

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Profile answers
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[str] = mapped_column(String(50), nullable=False)
    visa: Mapped[str] = mapped_column(String(100), nullable=False)
    nationality: Mapped[str] = mapped_column(String(100), nullable=False)
    experience: Mapped[str] = mapped_column(String(100), nullable=False)
    job: Mapped[str] = mapped_column(String(100), nullable=False)
    skills: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    # Metadata
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)

    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_job_views_non_negative"),
        CheckConstraint("status IN ('active', 'expired')", name="ck_job_status_valid"),
        Index("idx_job_timestamp", "timestamp"),
    )

    def __repr__(self) -> str:
        """String representation of JobPost."""
        return f"<JobPost(id={self.id!r}, name={self.name!r}, job={self.job!r})>"

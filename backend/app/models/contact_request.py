"""
Contact Request Database Model

An employer's request to see a job seeker's phone number.
"""

from typing import Optional

from sqlalchemy import BigInteger, String, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ContactRequest(Base):
    """
    Contact request between an employer and the owner of a job post.

    ``job_id`` is a plain reference, not a foreign key: requests outlive
    the board listing. ``job_seeker_phone_normalized`` is copied from the
    job when the request is submitted so the seeker portal can query it
    directly.
    """

    __tablename__ = "contact_requests"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    job_id: Mapped[str] = mapped_column(String(64), nullable=False)

    job_seeker_name: Mapped[str] = mapped_column(String(255), nullable=False)
    employer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    employer_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    employer_phone_normalized: Mapped[str] = mapped_column(String(50), nullable=False)
    job_seeker_phone_normalized: Mapped[str] = mapped_column(String(50), nullable=False)

    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    approved_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    rejected_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_contact_request_status_valid"
        ),
        CheckConstraint(
            "approved_at IS NULL OR rejected_at IS NULL",
            name="ck_contact_request_single_resolution"
        ),
        Index("idx_contact_request_seeker_phone", "job_seeker_phone_normalized"),
        Index("idx_contact_request_employer_phone", "employer_phone_normalized"),
        Index("idx_contact_request_job_id", "job_id"),
    )

    def __repr__(self) -> str:
        return f"<ContactRequest(id={self.id!r}, job_id={self.job_id!r}, status={self.status!r})>"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

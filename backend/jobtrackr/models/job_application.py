from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from jobtrackr.core.base import Base

# Conventional set shown in the UI. Not enforced at storage; any string is accepted.
JOB_STATUSES = ("Applied", "Interview", "Offer", "Rejected", "Withdrawn")
DEFAULT_JOB_STATUS = "Applied"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)

    # ownership
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)

    status = Column(String(50), nullable=False, default=DEFAULT_JOB_STATUS, server_default=DEFAULT_JOB_STATUS, index=True)
    applied_date = Column(Date, nullable=True, index=True)

    job_link = Column(String(500), nullable=False, default="", server_default="")
    notes = Column(Text, nullable=False, default="", server_default="")

    # Values for the user's custom columns, keyed by column key.
    custom_data = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="job_applications")

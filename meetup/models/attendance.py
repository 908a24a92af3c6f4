from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from meetup.db.database import Base

ATTENDING = "attending"
WAITLIST = "waitlist"
PENDING = "pending"


class Attendance(Base):
    __tablename__ = "attendances"

    id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # attending | waitlist | pending; only "attending" counts towards numAttending
    status = Column(String, nullable=False, default=PENDING)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    event = relationship("Event", back_populates="attendances")
    user = relationship("User", back_populates="attendances")

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="unique_event_user_attendance"),
    )

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from meetup.db.database import Base


class Group(Base):
    """
    A group owned by its organizer.

    Deleting a group removes its memberships, images, venues and events
    (and, through events, their attendances and images).
    """
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True)
    organizer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(60), nullable=False)
    about = Column(Text, nullable=False)
    type = Column(String, nullable=False)  # Online | In person
    private = Column(Boolean, nullable=False, default=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    organizer = relationship("User", back_populates="groups")
    memberships = relationship("Membership", back_populates="group", cascade="all, delete")
    images = relationship(
        "GroupImage",
        back_populates="group",
        cascade="all, delete",
        order_by="GroupImage.id",
    )
    venues = relationship("Venue", back_populates="group", cascade="all, delete", order_by="Venue.id")
    events = relationship("Event", back_populates="group", cascade="all, delete")

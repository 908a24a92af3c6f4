from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from meetup.db.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False, default="Not Set")
    last_name = Column(String, nullable=False, default="Not Set")
    username = Column(String(30), unique=True, nullable=False)
    email = Column(String(256), unique=True, nullable=False)

    # bcrypt digest, never serialized
    hashed_password = Column(String(60), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    groups = relationship("Group", back_populates="organizer", cascade="all, delete")
    memberships = relationship("Membership", back_populates="user", cascade="all, delete")
    attendances = relationship("Attendance", back_populates="user", cascade="all, delete")

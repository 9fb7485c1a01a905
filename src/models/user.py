"""User model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and task ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    # The single refresh token currently honoured for this user, NULL when logged out
    refresh_token = Column(Text, nullable=True)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")

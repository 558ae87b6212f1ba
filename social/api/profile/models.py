import uuid

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func

from social.database.database import Base


class Profile(Base):
    """
    User profiles. Rows are issued by the identity provider,
    this service only reads them and bumps the counters.
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(50), unique=True, index=True, nullable=False)
    full_name = Column(String(100), nullable=False)
    avatar_url = Column(String(255), nullable=True)

    friends_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_active = Column(Boolean, default=True)

from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from social.database.database import Base


class RelationshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"


def make_pair_key(first_id: str, second_id: str) -> str:
    """Same key for {A, B} and {B, A}."""
    low, high = sorted((first_id, second_id))
    return f"{low}:{high}"


class Relationship(Base):
    __tablename__ = "friends"

    id = Column(Integer, primary_key=True, index=True)
    initiator_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    pair_key = Column(String(80), nullable=False)
    status = Column(String(20), nullable=False, default=RelationshipStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    initiator = relationship("Profile", foreign_keys=[initiator_id])
    recipient = relationship("Profile", foreign_keys=[recipient_id])

    __table_args__ = (
        UniqueConstraint("initiator_id", "recipient_id", name="unique_friendship"),
        UniqueConstraint("pair_key", name="unique_friendship_pair"),
        CheckConstraint("initiator_id <> recipient_id", name="no_self_friendship"),
        CheckConstraint("status IN ('pending', 'accepted', 'blocked')", name="friendship_status"),
        Index("ix_friends_recipient_status", "recipient_id", "status"),
    )

    def __init__(self, initiator_id: str, recipient_id: str, status: str, **kwargs):
        super().__init__(
            initiator_id=initiator_id,
            recipient_id=recipient_id,
            pair_key=make_pair_key(initiator_id, recipient_id),
            status=status,
            **kwargs
        )

    def __repr__(self):
        return f"<Relationship {self.initiator_id}->{self.recipient_id} {self.status}>"

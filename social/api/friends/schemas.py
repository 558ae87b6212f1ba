from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from social.api.friends.models import RelationshipStatus


class FriendAction(str, Enum):
    REQUEST = "request"
    ACCEPT = "accept"
    REJECT = "reject"
    BLOCK = "block"


class FriendActionRequest(BaseModel):
    target_user_id: str = Field(..., min_length=1, description="ID of the other user")
    # Kept as a plain string so unknown actions reach the service as InvalidAction
    action: str = Field(..., description="request | accept | reject | block")


class ActionAck(BaseModel):
    success: bool = True


class UserShort(BaseModel):
    """Short user info."""
    id: str
    username: str
    full_name: str
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RelationshipItem(BaseModel):
    initiator_id: str
    recipient_id: str
    status: RelationshipStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profile: UserShort

    model_config = ConfigDict(from_attributes=True)


class RelationshipStatusResponse(BaseModel):
    status: Optional[RelationshipStatus] = None
    is_initiator: bool = False

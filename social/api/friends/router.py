from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from sqlalchemy.orm import Session

from social.api.auth.dependencies import get_current_actor
from social.api.friends.events import FriendshipEvents
from social.api.friends.models import RelationshipStatus
from social.api.friends.schemas import ActionAck, FriendActionRequest, RelationshipItem, RelationshipStatusResponse
from social.api.friends.service import FriendshipService
from social.api.friends.store import RelationshipStore
from social.api.profile.models import Profile
from social.database.database import get_db, get_session_factory

router = APIRouter(prefix="/api/v1/friends", tags=["friends"])


def get_friendship_service(
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        session_factory=Depends(get_session_factory)
) -> FriendshipService:
    events = FriendshipEvents(session_factory, dispatch=background_tasks.add_task)
    return FriendshipService(RelationshipStore(db), events)


@router.post("/action", response_model=ActionAck)
async def friend_action(
        data: FriendActionRequest,
        current_user: Profile = Depends(get_current_actor),
        friendship_service: FriendshipService = Depends(get_friendship_service)
):
    return friendship_service.handle_action(current_user, data.target_user_id, data.action)


@router.options("/action", include_in_schema=False)
async def friend_action_options():
    # Browser preflights are answered by CORSMiddleware before reaching here
    return Response(status_code=200)


@router.get("/", response_model=List[RelationshipItem])
async def get_relationships(
        status: RelationshipStatus = RelationshipStatus.ACCEPTED,
        current_user: Profile = Depends(get_current_actor),
        friendship_service: FriendshipService = Depends(get_friendship_service)
):
    return friendship_service.list_relationships(current_user, status)


@router.get("/status/{user_id}", response_model=RelationshipStatusResponse)
async def friend_status(
        user_id: str,
        current_user: Profile = Depends(get_current_actor),
        friendship_service: FriendshipService = Depends(get_friendship_service)
):
    return friendship_service.get_status(current_user, user_id)

import logging
from typing import List, Optional

from social.api.friends.events import FriendshipEvents
from social.api.friends.exceptions import (
    AlreadyFriends,
    AlreadyPending,
    CannotAcceptOwnRequest,
    ConflictingState,
    DuplicateKey,
    InvalidAction,
    NoPendingRequest,
    NothingToReject,
    RelationshipBlocked,
    SelfTargetInvalid,
    TargetNotFound,
    Unauthenticated,
)
from social.api.friends.models import Relationship, RelationshipStatus
from social.api.friends.schemas import FriendAction, RelationshipItem, RelationshipStatusResponse, UserShort
from social.api.friends.store import RelationshipStore
from social.api.profile.models import Profile

logger = logging.getLogger(__name__)


class FriendshipService:
    def __init__(self, store: RelationshipStore, events: FriendshipEvents):
        self.store = store
        self.events = events

    def handle_action(self, actor: Optional[Profile], target_id: str, action: str) -> dict:
        """
        Moves the relationship between actor and target through one action.

        Returns the acknowledgement, raises a RelationshipError otherwise.
        """
        if actor is None:
            raise Unauthenticated()
        if actor.id == target_id:
            raise SelfTargetInvalid()
        try:
            action = FriendAction(action)
        except ValueError:
            raise InvalidAction() from None

        if self.store.get_profile(target_id) is None:
            raise TargetNotFound()

        existing = self._get_existing(actor.id, target_id)

        handlers = {
            FriendAction.REQUEST: self._request,
            FriendAction.ACCEPT: self._accept,
            FriendAction.REJECT: self._reject,
            FriendAction.BLOCK: self._block,
        }
        handlers[action](actor, target_id, existing)
        return {"success": True}

    def _get_existing(self, actor_id: str, target_id: str) -> Optional[Relationship]:
        rows = self.store.find_pair(actor_id, target_id)
        if len(rows) > 1:
            logger.error(f"Found {len(rows)} relationship rows for pair {actor_id}/{target_id}")
            raise ConflictingState()
        return rows[0] if rows else None

    def _request(self, actor: Profile, target_id: str, existing: Optional[Relationship]):
        if existing:
            self._raise_for_existing(existing)

        try:
            self.store.insert(Relationship(actor.id, target_id, RelationshipStatus.PENDING.value))
        except DuplicateKey:
            # Lost a race with a concurrent writer for the same pair
            current = self._get_existing(actor.id, target_id)
            if current is not None and current.status == RelationshipStatus.PENDING.value:
                raise AlreadyPending()
            raise ConflictingState()

        logger.info(f"Friend request {actor.id} -> {target_id}")
        self.events.friend_requested(actor, target_id)

    @staticmethod
    def _raise_for_existing(existing: Relationship):
        if existing.status == RelationshipStatus.BLOCKED.value:
            raise RelationshipBlocked()
        if existing.status == RelationshipStatus.ACCEPTED.value:
            raise AlreadyFriends()
        if existing.status == RelationshipStatus.PENDING.value:
            raise AlreadyPending()
        raise ConflictingState()

    def _accept(self, actor: Profile, target_id: str, existing: Optional[Relationship]):
        if not existing or existing.status != RelationshipStatus.PENDING.value:
            raise NoPendingRequest()
        # Only the recipient can accept
        if existing.recipient_id != actor.id:
            raise CannotAcceptOwnRequest()

        initiator_id = existing.initiator_id
        if not self.store.accept_pending(existing):
            # Rejected, blocked or accepted by a concurrent caller since the read
            logger.info(f"Pending request {initiator_id} -> {actor.id} changed before accept")
            raise ConflictingState()

        logger.info(f"Friend request {initiator_id} -> {actor.id} accepted")
        self.events.friend_accepted(initiator_id, actor)

    def _reject(self, actor: Profile, target_id: str, existing: Optional[Relationship]):
        if not existing:
            raise NothingToReject()

        previous_status = existing.status
        self.store.delete(existing)
        logger.info(f"Relationship {actor.id}/{target_id} ({previous_status}) removed by {actor.id}")

    def _block(self, actor: Profile, target_id: str, existing: Optional[Relationship]):
        blocked = Relationship(actor.id, target_id, RelationshipStatus.BLOCKED.value)
        try:
            self.store.replace([existing] if existing else [], blocked)
        except DuplicateKey:
            raise ConflictingState()
        logger.info(f"User {target_id} blocked by {actor.id}")

    def get_status(self, actor: Profile, target_id: str) -> RelationshipStatusResponse:
        if actor.id == target_id:
            raise SelfTargetInvalid()
        existing = self._get_existing(actor.id, target_id)
        if existing is None:
            return RelationshipStatusResponse()
        return RelationshipStatusResponse(
            status=RelationshipStatus(existing.status),
            is_initiator=existing.initiator_id == actor.id
        )

    def list_relationships(self, actor: Profile, status: RelationshipStatus) -> List[RelationshipItem]:
        items = []
        for row in self.store.list_for_user(actor.id, status):
            other = row.recipient if row.initiator_id == actor.id else row.initiator
            items.append(RelationshipItem(
                initiator_id=row.initiator_id,
                recipient_id=row.recipient_id,
                status=RelationshipStatus(row.status),
                created_at=row.created_at,
                updated_at=row.updated_at,
                profile=UserShort.model_validate(other),
            ))
        return items

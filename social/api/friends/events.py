"""
Best-effort follow-ups of relationship transitions.

They run after the primary write has committed, each in its own session.
A failure is logged and dropped: it never reaches the caller and never
undoes the relationship change.
"""
import logging
from typing import Callable, Optional

from social.api.friends.store import RelationshipStore
from social.api.notifications.models import NotificationType

logger = logging.getLogger(__name__)


def _best_effort(description: str, action: Callable[[], None]):
    try:
        action()
    except Exception:
        logger.exception(f"Side effect failed: {description}")


def record_friend_request(session_factory, sender_id: str, sender_name: str, receiver_id: str):
    db = session_factory()
    try:
        store = RelationshipStore(db)
        _best_effort(
            f"friend_request notification for {receiver_id}",
            lambda: store.insert_notification(
                user_id=receiver_id,
                type=NotificationType.FRIEND_REQUEST.value,
                title="New Friend Request",
                message=f"{sender_name} sent you a friend request!",
                sender_id=sender_id,
                is_read=False,
            )
        )
    finally:
        db.close()


def record_friend_accepted(session_factory, initiator_id: str, accepter_id: str, accepter_name: str):
    db = session_factory()
    try:
        store = RelationshipStore(db)
        for user_id in (accepter_id, initiator_id):
            _best_effort(
                f"friends_count increment for {user_id}",
                lambda user_id=user_id: store.increment_counter(user_id, "friends_count")
            )
        _best_effort(
            f"friend_accepted notification for {initiator_id}",
            lambda: store.insert_notification(
                user_id=initiator_id,
                type=NotificationType.FRIEND_ACCEPTED.value,
                title="Friend Request Accepted",
                message=f"{accepter_name} accepted your friend request!",
                sender_id=accepter_id,
                is_read=False,
            )
        )
    finally:
        db.close()


class FriendshipEvents:
    """
    Hands side effects to a dispatcher (FastAPI BackgroundTasks.add_task
    in the API, a direct call in scripts and tests).
    """

    def __init__(self, session_factory, dispatch: Optional[Callable] = None):
        self.session_factory = session_factory
        self.dispatch = dispatch or (lambda func, *args: func(*args))

    def friend_requested(self, sender, receiver_id: str):
        logger.debug(f"Scheduling friend_request side effects {sender.id} -> {receiver_id}")
        self.dispatch(record_friend_request, self.session_factory, sender.id, sender.full_name, receiver_id)

    def friend_accepted(self, initiator_id: str, accepter):
        logger.debug(f"Scheduling friend_accepted side effects {initiator_id} <- {accepter.id}")
        self.dispatch(record_friend_accepted, self.session_factory, initiator_id, accepter.id, accepter.full_name)

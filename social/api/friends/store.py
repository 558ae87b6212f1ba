import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import and_, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from social.api.friends.exceptions import DuplicateKey, StoreUnavailable
from social.api.friends.models import Relationship, RelationshipStatus
from social.api.notifications.models import Notification
from social.api.profile.models import Profile

logger = logging.getLogger(__name__)

COUNTER_FIELDS = {"friends_count"}


class RelationshipStore:
    """
    Durable storage for relationship rows, profile counters and notifications.

    Every storage failure leaves the session rolled back and is raised as
    StoreUnavailable; a rejected insert is raised as DuplicateKey.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Store rejected {operation}: {e.orig}")
            raise DuplicateKey(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store failure during {operation}: {str(e)}")
            raise StoreUnavailable() from e

    def get_profile(self, user_id: str) -> Optional[Profile]:
        with self._guard("profile lookup"):
            return self.db.query(Profile).filter(Profile.id == user_id).first()

    def find_pair(self, first_id: str, second_id: str) -> List[Relationship]:
        """All rows for the unordered pair, whichever way round they were stored."""
        with self._guard("pair lookup"):
            return self.db.query(Relationship).filter(
                or_(
                    and_(Relationship.initiator_id == first_id, Relationship.recipient_id == second_id),
                    and_(Relationship.initiator_id == second_id, Relationship.recipient_id == first_id)
                )
            ).all()

    def insert(self, relationship: Relationship) -> Relationship:
        with self._guard("insert"):
            self.db.add(relationship)
            self.db.commit()
            self.db.refresh(relationship)
        return relationship

    def delete(self, relationship: Relationship):
        with self._guard("delete"):
            self.db.delete(relationship)
            self.db.commit()

    def accept_pending(self, relationship: Relationship) -> bool:
        """
        Marks a pending row accepted. False when the row is gone or no longer
        pending by the time the update runs.
        """
        with self._guard("accept"):
            result = self.db.execute(
                update(Relationship)
                .where(
                    Relationship.id == relationship.id,
                    Relationship.status == RelationshipStatus.PENDING.value
                )
                .values(status=RelationshipStatus.ACCEPTED.value)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
            if result.rowcount != 1:
                return False
            self.db.refresh(relationship)
        return True

    def replace(self, existing: List[Relationship], relationship: Relationship) -> Relationship:
        """Deletes the given rows and inserts the new one in a single transaction."""
        with self._guard("replace"):
            for row in existing:
                self.db.delete(row)
            # deletes must reach the database before the insert reuses the pair
            self.db.flush()
            self.db.add(relationship)
            self.db.commit()
            self.db.refresh(relationship)
        return relationship

    def list_for_user(self, user_id: str, status: RelationshipStatus) -> List[Relationship]:
        query = self.db.query(Relationship).options(
            joinedload(Relationship.initiator), joinedload(Relationship.recipient)
        ).filter(Relationship.status == status.value)
        if status == RelationshipStatus.ACCEPTED:
            query = query.filter(
                or_(Relationship.initiator_id == user_id, Relationship.recipient_id == user_id)
            )
        elif status == RelationshipStatus.PENDING:
            query = query.filter(Relationship.recipient_id == user_id)
        else:
            query = query.filter(Relationship.initiator_id == user_id)
        with self._guard("list"):
            return query.order_by(Relationship.created_at.desc()).all()

    def increment_counter(self, user_id: str, field: str):
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown counter: {field}")
        column = getattr(Profile, field)
        with self._guard("counter increment"):
            self.db.execute(
                update(Profile).where(Profile.id == user_id).values({column: column + 1})
            )
            self.db.commit()

    def insert_notification(self, **fields) -> Notification:
        notification = Notification(**fields)
        with self._guard("notification insert"):
            self.db.add(notification)
            self.db.commit()
        return notification

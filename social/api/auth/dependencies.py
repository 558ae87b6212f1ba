import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from social.api.auth.utils import decode_access_token
from social.api.friends.exceptions import Unauthenticated
from social.api.friends.store import RelationshipStore
from social.api.profile.models import Profile
from social.database.database import get_db

logger = logging.getLogger(__name__)

# auto_error is off so a missing header answers with our own error body
bearer_scheme = HTTPBearer(auto_error=False)


def resolve_actor(credentials: Optional[HTTPAuthorizationCredentials], db: Session) -> Profile:
    """
    Resolves the caller from a bearer credential.
    The actor id always comes from the token, never from the request body.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Missing Authorization header")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise Unauthenticated()

    profile = RelationshipStore(db).get_profile(user_id)
    if profile is None or not profile.is_active:
        logger.info(f"Token for unknown or inactive user {user_id}")
        raise Unauthenticated()
    return profile


async def get_current_actor(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: Session = Depends(get_db)
) -> Profile:
    return resolve_actor(credentials, db)

"""Failures of the relationship service.

Every failure carries the HTTP status the API answers with; the message
is what the caller sees in the ``error`` field.
"""
from typing import Optional

from fastapi import status


class RelationshipError(Exception):
    """Base exception for all relationship failures."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Relationship action failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


# --- Authentication ---

class Unauthenticated(RelationshipError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid user token"


# --- Validation ---

class SelfTargetInvalid(RelationshipError):
    message = "Cannot friend yourself"


class InvalidAction(RelationshipError):
    message = "Invalid request parameters"


class TargetNotFound(RelationshipError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


# --- Domain state ---

class ConflictingState(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "Relationship is in a conflicting state"


class AlreadyPending(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "Request already pending"


class AlreadyFriends(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "Already friends"


class RelationshipBlocked(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "Cannot request friendship"


class CannotAcceptOwnRequest(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "You cannot accept your own request"


class NoPendingRequest(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "No pending request to accept"


class NothingToReject(RelationshipError):
    status_code = status.HTTP_409_CONFLICT
    message = "No relationship to reject"


# --- Store ---

class StoreUnavailable(RelationshipError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Relationship store unavailable"


class DuplicateKey(Exception):
    """Raised by the store when a uniqueness constraint rejects an insert."""
    pass

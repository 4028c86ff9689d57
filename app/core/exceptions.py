"""
Domain exceptions raised by the services.

Every error carries the HTTP status it maps to, so the API layer can turn it
into the standard `{success, message}` envelope without knowing the rule
that failed.
"""

from typing import Optional


class SkillSwapError(Exception):
    """Base exception for all skill swap domain errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SkillSwapError):
    status_code = 400
    default_message = "Validation error"


class BusinessRuleViolation(SkillSwapError):
    """A guard on the requested operation did not hold."""

    status_code = 400
    default_message = "Business rule violation"


class NotFound(SkillSwapError):
    status_code = 404
    default_message = "Record not found"


class Forbidden(SkillSwapError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class Unauthorized(SkillSwapError):
    status_code = 401
    default_message = "Authentication required"


class Conflict(SkillSwapError):
    status_code = 409
    default_message = "A record with this information already exists"


# --- Swap lifecycle ---

class SelfSwap(BusinessRuleViolation):
    default_message = "You cannot send a swap request to yourself"


class ReceiverNotFound(NotFound):
    default_message = "Receiver not found"


class ReceiverUnavailable(BusinessRuleViolation):
    default_message = "This user is not available for swaps"


class ReceiverPrivate(Forbidden):
    default_message = "Cannot send request to private profile"


class SkillNotOffered(BusinessRuleViolation):
    """Raised when one side of a swap does not offer the named skill."""

    def __init__(self, party: str):
        self.party = party
        if party == "sender":
            message = "You do not have this skill to offer"
        else:
            message = "Receiver does not offer this skill"
        super().__init__(message)


class DuplicatePendingRequest(BusinessRuleViolation):
    default_message = "There is already a pending swap request between you and this user"


class InvalidTransition(BusinessRuleViolation):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change a {current} swap request to {target}")


class InvalidScheduledDate(BusinessRuleViolation):
    default_message = "Scheduled date must be in the future"


# --- Feedback ---

class SwapNotCompleted(BusinessRuleViolation):
    default_message = "Feedback can only be given for completed swaps"


class DuplicateFeedback(BusinessRuleViolation):
    default_message = "You have already provided feedback for this swap"


class FeedbackWindowExpired(BusinessRuleViolation):
    def __init__(self, action: str, hours: int):
        super().__init__(f"Feedback can only be {action} within {hours} hours of creation")


# --- Catalog and profile ---

class DuplicateSkill(BusinessRuleViolation):
    default_message = "A skill with this name already exists"


class DuplicateUserSkill(BusinessRuleViolation):
    default_message = "You already have this skill with this type"

"""
Application-layer exceptions.

Part of RQ-110: Finish workout error taxonomy

These exceptions are used across application and infrastructure layers.
Adapters translate store errors into the persistence hierarchy; use cases
map them onto result objects.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from backend.core.set_validator import SetViolation


class ProgressionError(Exception):
    """Base class for progression engine errors."""

    pass


class SessionValidationError(ProgressionError):
    """Raised when completed sets fail validation.

    Carries every violation found in the session so the caller can present
    one consolidated error.
    """

    def __init__(self, violations: "List[SetViolation]"):
        self.violations = list(violations)
        super().__init__(
            f"Workout has {len(self.violations)} invalid set(s): "
            + "; ".join(v.describe() for v in self.violations)
        )


class SessionStateError(ProgressionError):
    """Raised when finishing a session that is no longer active."""

    pass


class RateLimitExceededError(ProgressionError):
    """Raised when a user performs too many actions within the window."""

    def __init__(self, user_id: str, retry_after: float):
        super().__init__(
            f"Too many actions for user {user_id}. Please try again in a moment."
        )
        self.user_id = user_id
        self.retry_after = retry_after


class PersistenceError(ProgressionError):
    """A read or write against an external store failed."""

    retryable = False

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class StatsVersionConflictError(PersistenceError):
    """The stats document changed since it was read (compare-and-swap failed).

    The caller should re-read the stats and retry the operation.
    """

    retryable = True

    def __init__(self, user_id: str, expected_version: int):
        super().__init__(
            f"Stats for user {user_id} changed since version {expected_version}",
            code="stats_version_conflict",
        )
        self.user_id = user_id
        self.expected_version = expected_version


class DuplicateUnlockError(PersistenceError):
    """An unlock row already exists for this (user, achievement) pair."""

    def __init__(self, user_id: str, achievement_id: str):
        super().__init__(
            f"Achievement {achievement_id} already unlocked for user {user_id}",
            code="23505",
        )
        self.user_id = user_id
        self.achievement_id = achievement_id


class ItemGrantError(PersistenceError):
    """Adding or incrementing an inventory item failed."""

    pass

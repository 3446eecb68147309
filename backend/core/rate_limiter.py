"""
Per-user sliding-window rate limiter.

Part of RQ-111: Throttle repeated actions

Each instance keeps its own per-user timestamps, so callers (and tests)
construct and inject isolated limiters instead of sharing process state.
Users with no recent actions are pruned periodically, so a long-lived
limiter only tracks users active within the cleanup interval.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 1.0
DEFAULT_MAX_ACTIONS = 5
DEFAULT_CLEANUP_INTERVAL_SECONDS = 60.0


class SlidingWindowRateLimiter:
    """
    Allows at most ``max_actions`` per user within any ``window_seconds``.

    Usage:
        >>> limiter = SlidingWindowRateLimiter(window_seconds=1.0, max_actions=5)
        >>> limiter.check("user-123")
        True
        >>> limiter.retry_after("user-123")  # seconds to wait once check() is False
        0.0
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        max_actions: int = DEFAULT_MAX_ACTIONS,
        clock: Optional[Callable[[], float]] = None,
        cleanup_interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
    ):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_actions < 1:
            raise ValueError("max_actions must be at least 1")
        if cleanup_interval_seconds <= 0:
            raise ValueError("cleanup_interval_seconds must be positive")
        self.window_seconds = float(window_seconds)
        self.max_actions = max_actions
        self.cleanup_interval_seconds = max(float(cleanup_interval_seconds), self.window_seconds)
        self._clock = clock or time.monotonic
        self._actions: Dict[str, Deque[float]] = {}
        self._last_cleanup = self._clock()

    def __len__(self) -> int:
        """Number of users currently tracked."""
        return len(self._actions)

    def _trim(self, actions: Deque[float], now: float) -> None:
        while actions and now - actions[0] >= self.window_seconds:
            actions.popleft()

    def check(self, user_id: str) -> bool:
        """
        Record an action if the user is under the limit.

        Returns:
            True if the action is allowed (and was recorded), False otherwise
        """
        now = self._clock()
        if now - self._last_cleanup >= self.cleanup_interval_seconds:
            self.cleanup()
        actions = self._actions.setdefault(user_id, deque())
        self._trim(actions, now)
        if len(actions) >= self.max_actions:
            logger.warning("Rate limit reached for user %s", user_id)
            return False
        actions.append(now)
        return True

    def retry_after(self, user_id: str) -> float:
        """Seconds until the oldest action in the window expires (0 if not limited)."""
        actions = self._actions.get(user_id)
        if not actions or len(actions) < self.max_actions:
            return 0.0
        return max(0.0, self.window_seconds - (self._clock() - actions[0]))

    def cleanup(self) -> int:
        """
        Drop expired timestamps and users with no recent actions.

        Called from check() once per cleanup interval.

        Returns:
            Number of users removed
        """
        now = self._clock()
        self._last_cleanup = now
        removed = 0
        for user_id in list(self._actions):
            actions = self._actions[user_id]
            self._trim(actions, now)
            if not actions:
                del self._actions[user_id]
                removed += 1
        if removed:
            logger.debug("Rate limiter dropped %d idle user(s)", removed)
        return removed

    def reset(self, user_id: Optional[str] = None) -> None:
        """Forget one user's actions, or everyone's."""
        if user_id is None:
            self._actions.clear()
        else:
            self._actions.pop(user_id, None)

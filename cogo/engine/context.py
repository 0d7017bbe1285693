"""Cooperative cancellation signal passed to every step."""

import threading
import time
from typing import Optional


class Context:
    """
    Cancellation signal shared by the navigator, its steps and the runner.

    Nothing is interrupted forcibly: the navigator checks ``cancelled`` once
    per step and prompts check it before rendering. A deadline set with
    ``with_timeout`` counts as cancellation once it has passed.
    """

    def __init__(self, deadline: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def background(cls) -> "Context":
        """A context that is only cancelled if someone calls ``cancel()``."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        """A context that reports itself cancelled after ``seconds``."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return False

    def __repr__(self) -> str:
        return f"Context(cancelled={self.cancelled})"

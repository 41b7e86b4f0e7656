"""Discrete input events (advance, restart) delivered to subscribers."""

from typing import Callable, Dict, Iterable, List, Optional

from shared.config import config
from shared.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

ADVANCE = "advance"
RESTART = "restart"
EVENTS = (ADVANCE, RESTART)

Handler = Callable[[], None]


class InputSource:
    """
    Event hub for viewer input.

    Consumers subscribe explicitly and receive an unsubscribe callable.
    """

    def __init__(self, advance_keys: Optional[Iterable[str]] = None):
        keys = advance_keys if advance_keys is not None else config.ADVANCE_KEYS
        self.advance_keys = {key.lower() for key in keys}
        self._handlers: Dict[str, List[Handler]] = {event: [] for event in EVENTS}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        if event not in self._handlers:
            raise ValueError(f"Unknown input event '{event}'")
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def subscriber_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    def emit(self, event: str) -> None:
        logger.debug(f"Input event: {event}")
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._handlers.get(event, [])):
            handler()

    def click(self) -> None:
        self.emit(ADVANCE)

    def press(self, key: str) -> bool:
        """Emit ``advance`` for a designated key; returns whether it was handled."""
        if key.lower() in self.advance_keys:
            self.emit(ADVANCE)
            return True
        return False

    def restart(self) -> None:
        self.emit(RESTART)

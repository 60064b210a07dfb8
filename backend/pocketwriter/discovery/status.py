"""Observable holder for the client's ConnectionState."""

import logging
from typing import Callable, List

from pocketwriter.discovery.models import ConnectionState

logger = logging.getLogger(__name__)

StateListener = Callable[[ConnectionState, ConnectionState], None]


class ConnectionStatus:
    """
    Current connection state plus synchronous change listeners.

    Listeners receive (previous, current) on every transition. A listener
    that raises is logged and does not stop the others.
    """

    def __init__(self, initial: ConnectionState = ConnectionState.UNKNOWN):
        self._state = initial
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> ConnectionState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, state: ConnectionState) -> None:
        previous = self._state
        self._state = state
        if previous == state:
            return
        logger.debug("Connection state %s → %s", previous.value, state.value)
        for listener in list(self._listeners):
            try:
                listener(previous, state)
            except Exception:
                logger.exception("Connection state listener failed")

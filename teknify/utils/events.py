from typing import Callable, Dict, List
import asyncio
import inspect
import logging
logger = logging.getLogger(__name__)

TASK_START = "task_start"        # (UploadRequest)
TASK_COMPLETE = "task_complete"  # (TaskOutcome)
EVENTS = (TASK_START, TASK_COMPLETE)


class EventEmitter:
    """Dispatches orchestrator events to sync or async listeners."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {name: [] for name in EVENTS}
        self._lock = asyncio.Lock()

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        if event_name not in self._listeners:
            raise ValueError(f"Unknown event {event_name!r}, expected one of {EVENTS}")
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Callable):
        """Unsubscribe from an event."""
        if callback in self._listeners.get(event_name, []):
            self._listeners[event_name].remove(callback)

    async def emit(self, event_name: str, *args):
        """
        Call every listener of ``event_name`` in subscription order.

        Listener calls are serialized by a lock so output written by one
        listener is never interleaved with another's. A failing listener is
        logged and skipped.
        """
        listeners = self._listeners.get(event_name)
        if not listeners:
            return

        async with self._lock:
            for callback in listeners[:]:
                try:
                    if inspect.iscoroutinefunction(callback):
                        await callback(*args)
                    else:
                        callback(*args)
                except Exception as e:
                    logger.error(f"Error in event listener for {event_name}: {e}")

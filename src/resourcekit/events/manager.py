"""EventManager — synchronous, ordered listener dispatch with short-circuit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..ports.events import EmitResult, Event

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.events import Listener

logger = logging.getLogger("resourcekit.events")


class _Registration:
    __slots__ = ("listener", "priority", "sequence")

    def __init__(self, listener: Listener, priority: int, sequence: int) -> None:
        self.listener = listener
        self.priority = priority
        self.sequence = sequence


class EventManager:
    """Local publish/subscribe used for resource extension points.

    Listeners run in ascending ``priority`` order; listeners sharing a
    priority run in registration order.  Each listener receives an
    :class:`~resourcekit.ports.events.Event` and its return value is
    collected into the :class:`~resourcekit.ports.events.EmitResult`.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[_Registration]] = {}
        self._sequence = 0

    # ── Registration ─────────────────────────────────────────────

    def attach(self, name: str, listener: Listener, priority: int = 0) -> None:
        """Register ``listener`` for event ``name``."""
        registrations = self._listeners.setdefault(name, [])
        if any(r.listener is listener for r in registrations):
            return
        self._sequence += 1
        registrations.append(_Registration(listener, priority, self._sequence))
        registrations.sort(key=lambda r: (r.priority, r.sequence))

    def detach(self, name: str, listener: Listener) -> bool:
        """Remove ``listener`` from ``name``; ``True`` if it was registered."""
        registrations = self._listeners.get(name, [])
        for registration in registrations:
            if registration.listener is listener:
                registrations.remove(registration)
                return True
        return False

    # ── Emission ─────────────────────────────────────────────────

    def emit(self, name: str, target: Any = None, **params: Any) -> EmitResult:
        """Invoke all listeners for ``name``."""
        return self._dispatch(Event(name, target, params), None)

    def emit_until(
        self,
        name: str,
        stop: Callable[[Any], bool],
        target: Any = None,
        **params: Any,
    ) -> EmitResult:
        """Invoke listeners until one returns a value satisfying ``stop``."""
        return self._dispatch(Event(name, target, params), stop)

    def _dispatch(
        self, event: Event, stop: Callable[[Any], bool] | None
    ) -> EmitResult:
        result = EmitResult()
        # Snapshot: listeners may attach/detach while we iterate.
        for registration in list(self._listeners.get(event.name, [])):
            response = self._invoke(registration.listener, event)
            result.responses.append(response)
            if stop is not None and stop(response):
                result.stopped = True
                break
            if event.propagation_stopped:
                result.stopped = True
                break
        if result.stopped:
            logger.debug("Propagation of %s stopped", event.name)
        return result

    def _invoke(self, listener: Listener, event: Event) -> Any:
        try:
            return listener(event)
        except Exception:
            logger.exception(
                "Error executing listener %s for event %s",
                getattr(listener, "__name__", type(listener).__name__),
                event.name,
            )
            raise

    # ── Introspection ────────────────────────────────────────────

    def get_listeners(self, name: str) -> list[Listener]:
        """Return listeners for ``name`` in invocation order."""
        return [r.listener for r in self._listeners.get(name, [])]

    def clear(self, name: str | None = None) -> None:
        """Remove registrations for ``name``, or all of them."""
        if name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(name, None)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeAlias,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def default_params_factory() -> dict[str, Any]:
    return {}


@dataclass
class Event:
    """
    Payload handed to every listener.

    ``params`` is the live mapping shared by all listeners of one emission,
    so a listener may alter values that later listeners and the emitter read.
    """

    name: str
    target: Any = None
    params: dict[str, Any] = field(default_factory=default_params_factory)
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


Listener: TypeAlias = "Callable[[Event], Any]"


@dataclass
class EmitResult:
    """Return values of the listeners that ran, plus whether emission stopped."""

    responses: list[Any] = field(default_factory=list)
    stopped: bool = False

    @property
    def last(self) -> Any:
        """The most recent listener return value, or ``None``."""
        return self.responses[-1] if self.responses else None


@runtime_checkable
class IEventManager(Protocol):
    """Protocol for the synchronous pub/sub capability used by resources."""

    def attach(self, name: str, listener: Listener, priority: int = 0) -> None:
        """Register ``listener`` for ``name``."""
        ...

    def emit(self, name: str, target: Any = None, **params: Any) -> EmitResult:
        """Invoke every listener for ``name``."""
        ...

    def emit_until(
        self,
        name: str,
        stop: Callable[[Any], bool],
        target: Any = None,
        **params: Any,
    ) -> EmitResult:
        """Invoke listeners until ``stop(result)`` is true for one of them."""
        ...

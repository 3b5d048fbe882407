from ..ports.events import EmitResult, Event
from .manager import EventManager

__all__ = ["EventManager", "EmitResult", "Event"]

from .data_source import IDataSource
from .entity import IEntity
from .events import EmitResult, Event, IEventManager, Listener

__all__ = [
    "IDataSource",
    "IEntity",
    "IEventManager",
    "EmitResult",
    "Event",
    "Listener",
]

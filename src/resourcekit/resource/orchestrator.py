"""Resource — CRUD orchestration with extension points around a data source."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..events.manager import EventManager
from ..exceptions import InvalidInputError, NotFoundError
from ..query.spec import QuerySpec
from .collection import ResultCollection
from .result import Created, Updated, ValidationFailed

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.data_source import IDataSource
    from ..ports.entity import IEntity
    from ..ports.events import IEventManager
    from .result import CreateResult, UpdateResult

logger = logging.getLogger("resourcekit.resource")

E = TypeVar("E", bound="IEntity")


def default_entity_factory(
    entity_type: type[E],
) -> Callable[[dict[str, Any]], E]:
    """Factory using ``entity_type.from_record`` when available.

    Otherwise the type is instantiated without arguments and populated with
    ``from_dict``.
    """
    from_record = getattr(entity_type, "from_record", None)
    if callable(from_record):
        return from_record

    def build(record: dict[str, Any]) -> E:
        entity = entity_type()
        entity.from_dict(record)
        return entity

    return build


class Resource(Generic[E]):
    """
    Generic CRUD façade over an :class:`~resourcekit.ports.IDataSource`.

    Every operation emits events on the resource's event manager.  The
    ``*.pre`` events of ``get_all``, ``get`` and ``delete`` are emitted with
    ``emit_until``: a listener returning a value of the expected type
    (a ``ResultCollection``, an entity, a ``bool``) supersedes the rest of
    the operation.

    ====================  ===========================  ========================
    Event                 Params                       Short-circuits on
    ====================  ===========================  ========================
    get_all.pre           –                            ``ResultCollection``
    get_all.post_query    records                      –
    get_all.post          items                        –
    get.pre               id                           entity instance
    get.post              entity                       –
    create.pre            spec (entity)                –
    create.post           entity                       –
    update.pre            id, spec (mutable ``dict``)  –
    update.post           entity                       –
    delete.pre            entity                       ``bool``
    delete.post           id, entity                   –
    ====================  ===========================  ========================

    Usage::

        articles = Resource(InMemoryDataSource(), Article)
        result = articles.create({"id": "intro", "title": "Intro"})
        if result.ok:
            article = result.entity
        else:
            render(result.errors)
    """

    def __init__(
        self,
        data_source: IDataSource,
        entity_type: type[E],
        *,
        entity_factory: Callable[[dict[str, Any]], E] | None = None,
        events: IEventManager | None = None,
        collection_factory: Callable[..., ResultCollection[E]] | None = None,
    ) -> None:
        self._data_source = data_source
        self._entity_type = entity_type
        self._entity_factory = entity_factory or default_entity_factory(entity_type)
        self._events = events if events is not None else EventManager()
        self._collection_factory = collection_factory or ResultCollection

    # ── Properties ───────────────────────────────────────────────

    @property
    def events(self) -> IEventManager:
        """Event manager, for attaching listeners."""
        return self._events

    @property
    def data_source(self) -> IDataSource:
        return self._data_source

    @property
    def entity_type(self) -> type[E]:
        return self._entity_type

    @property
    def resource_id(self) -> str:
        """Stable identifier of this resource (e.g. for permission checks)."""
        cls = type(self)
        return f"{cls.__module__}.{cls.__qualname__}"

    # ── Read ─────────────────────────────────────────────────────

    def get_all(self) -> ResultCollection[E]:
        """Return every record wrapped in a lazy collection."""
        response = self._events.emit_until(
            "get_all.pre",
            lambda result: isinstance(result, ResultCollection),
            target=self,
        )
        if response.stopped and isinstance(response.last, ResultCollection):
            logger.debug("get_all satisfied by a get_all.pre listener")
            return response.last

        records = self._data_source.query(QuerySpec())
        self._events.emit("get_all.post_query", target=self, records=records)

        items = self._collection_factory(records or [], self._entity_factory)
        self._events.emit("get_all.post", target=self, items=items)
        return items

    def get(self, entity_id: Any) -> E | None:
        """Return the entity for ``entity_id``, or ``None``."""
        response = self._events.emit_until(
            "get.pre",
            lambda result: isinstance(result, self._entity_type),
            target=self,
            id=entity_id,
        )
        if response.stopped and isinstance(response.last, self._entity_type):
            logger.debug("get(%r) satisfied by a get.pre listener", entity_id)
            return response.last

        record = self._data_source.get(entity_id)
        if record is None:
            return None
        entity = self._entity_factory(record)

        self._events.emit("get.post", target=self, entity=entity)
        return entity

    # ── Write ────────────────────────────────────────────────────

    def create(self, spec: Mapping[str, Any] | E) -> CreateResult[E]:
        """Validate and store a new entity.

        ``spec`` is either raw data or an entity instance.  Returns
        :class:`Created` on success, :class:`ValidationFailed` when the entity
        does not validate.

        Raises:
            InvalidInputError: If ``spec`` is neither a mapping nor an entity
                of this resource's type.
        """
        if isinstance(spec, Mapping):
            spec = self._entity_factory(dict(spec))
        if not isinstance(spec, self._entity_type):
            raise self._invalid_spec(spec)
        entity = spec

        self._events.emit("create.pre", target=self, spec=entity)

        if not entity.is_valid():
            logger.debug("create rejected by validation")
            return ValidationFailed(entity.get_validation_errors())

        record = self._data_source.create(entity.to_dict())
        entity.from_dict(record)

        self._events.emit("create.post", target=self, entity=entity)
        return Created(entity)

    def update(self, entity_id: Any, spec: Mapping[str, Any] | E) -> UpdateResult[E]:
        """Merge ``spec`` into the stored entity, validate and persist.

        ``update.pre`` listeners receive the in-flight ``spec`` dict and may
        mutate it before it is applied.

        Raises:
            NotFoundError: If no entity exists for ``entity_id``.
            InvalidInputError: If ``spec`` is neither a mapping nor an entity
                of this resource's type.
        """
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(
                entity_id, f"Entity with id={entity_id!r} does not exist"
            )

        if isinstance(spec, self._entity_type):
            spec = spec.to_dict()
        elif not isinstance(spec, Mapping):
            raise self._invalid_spec(spec)
        fields = dict(spec)

        self._events.emit("update.pre", target=self, id=entity_id, spec=fields)

        entity.from_dict(fields)
        if not entity.is_valid():
            logger.debug("update(%r) rejected by validation", entity_id)
            return ValidationFailed(entity.get_validation_errors())

        record = self._data_source.update(entity_id, fields)
        entity.from_dict(record)

        self._events.emit("update.post", target=self, entity=entity)
        return Updated(entity)

    def delete(self, target: Any) -> bool:
        """Delete by id or entity.

        Returns ``False`` when no such entity exists, the boolean returned by
        a vetoing ``delete.pre`` listener, or ``True`` once deleted.
        """
        if isinstance(target, self._entity_type):
            entity = target
            entity_id = entity.to_dict().get("id")
        else:
            entity_id = target
            entity = self.get(entity_id)
            if entity is None:
                return False

        response = self._events.emit_until(
            "delete.pre",
            lambda result: isinstance(result, bool),
            target=self,
            entity=entity,
        )
        if response.stopped and isinstance(response.last, bool):
            logger.debug("delete(%r) decided by a delete.pre listener", entity_id)
            return response.last

        self._data_source.delete(entity_id)

        self._events.emit("delete.post", target=self, id=entity_id, entity=entity)
        return True

    def _invalid_spec(self, spec: object) -> InvalidInputError:
        return InvalidInputError(
            f'Expected a mapping or an object of type "{self._entity_type.__name__}";'
            f' received "{type(spec).__name__}"'
        )

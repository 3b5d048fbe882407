"""MongoDataSource — ``IDataSource`` over a single MongoDB collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from ...exceptions import AlreadyExistsError, MongoPersistenceError, NotFoundError
from .criteria import MongoCriteriaTranslator
from .serialization import doc_to_record, record_to_doc

if TYPE_CHECKING:
    from pymongo.collection import Collection
    from pymongo.write_concern import WriteConcern

    from ...ports.events import IEventManager
    from ...query.spec import QuerySpec
    from .connection import MongoConnectionManager

logger = logging.getLogger("resourcekit.mongo.data_source")


@dataclass(frozen=True)
class MongoDataSourceOptions:
    """
    Configuration for :class:`MongoDataSource`.

    Attributes:
        id_field: Identity key of raw records at the data-source boundary.
        native_id_field: Identity key of stored documents.
        write_concern: Write concern for the collection; ``None`` keeps the
            client/database default.
        strict_operators: Reject unknown comparison operators instead of
            treating them as equality.
    """

    id_field: str = "id"
    native_id_field: str = "_id"
    write_concern: WriteConcern | None = None
    strict_operators: bool = False


class MongoDataSource:
    """Data source over one MongoDB collection.

    Queries are compiled by :class:`MongoCriteriaTranslator`.  When an event
    manager is given, ``query()`` emits ``query.pre`` (``query``),
    ``query.criteria`` (``query``, ``criteria``) and ``query.post``
    (``query``, ``criteria``, ``records``).

    Uniqueness of identities is enforced by MongoDB itself; a duplicate key
    on insert surfaces as :class:`~resourcekit.exceptions.AlreadyExistsError`.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        collection: str,
        *,
        database: str | None = None,
        options: MongoDataSourceOptions | None = None,
        translator: MongoCriteriaTranslator | None = None,
        events: IEventManager | None = None,
    ) -> None:
        self._connection = connection
        self._collection_name = collection
        self._database = database
        self._options = options or MongoDataSourceOptions()
        self._translator = translator or MongoCriteriaTranslator(
            strict=self._options.strict_operators
        )
        self._events = events

    def _collection(self) -> Collection[Any]:
        db = self._connection.database(self._database)
        if self._options.write_concern is None:
            return db.get_collection(self._collection_name)
        return db.get_collection(
            self._collection_name, write_concern=self._options.write_concern
        )

    def _to_doc(self, record: dict[str, Any]) -> dict[str, Any]:
        return record_to_doc(
            record,
            id_field=self._options.id_field,
            native_id_field=self._options.native_id_field,
        )

    def _to_record(self, doc: dict[str, Any]) -> dict[str, Any]:
        return doc_to_record(
            doc,
            id_field=self._options.id_field,
            native_id_field=self._options.native_id_field,
        )

    def _emit(self, name: str, **params: Any) -> None:
        if self._events is not None:
            self._events.emit(name, target=self, **params)

    # ── IDataSource ──────────────────────────────────────────────

    def query(self, spec: QuerySpec) -> list[dict[str, Any]]:
        self._emit("query.pre", query=spec)

        criteria = self._translator.translate(spec)
        self._emit("query.criteria", query=spec, criteria=criteria)

        try:
            cursor = self._collection().find(criteria.filter)
            if criteria.sort:
                cursor = cursor.sort(criteria.sort_list)
            if criteria.skip is not None:
                cursor = cursor.skip(criteria.skip)
            if criteria.limit is not None:
                cursor = cursor.limit(criteria.limit)
            records = [self._to_record(doc) for doc in cursor]
        except PyMongoError as e:
            raise MongoPersistenceError(str(e)) from e

        self._emit("query.post", query=spec, criteria=criteria, records=records)
        return records

    def get(self, entity_id: Any) -> dict[str, Any] | None:
        native_id = self._options.native_id_field
        try:
            doc = self._collection().find_one({native_id: entity_id})
        except PyMongoError as e:
            raise MongoPersistenceError(str(e)) from e
        if doc is None:
            return None
        return self._to_record(doc)

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        native_id = self._options.native_id_field
        doc = self._to_doc(record)
        if doc.get(native_id) is None:
            doc[native_id] = str(ObjectId())
        try:
            self._collection().insert_one(doc)
        except DuplicateKeyError as e:
            raise AlreadyExistsError(doc[native_id]) from e
        except PyMongoError as e:
            raise MongoPersistenceError(str(e)) from e
        logger.debug("Inserted %s into %s", doc[native_id], self._collection_name)
        return self._to_record(doc)

    def update(self, entity_id: Any, fields: dict[str, Any]) -> dict[str, Any]:
        native_id = self._options.native_id_field
        changes = self._to_doc(fields)
        changes.pop(native_id, None)
        try:
            coll = self._collection()
            if changes:
                doc = coll.find_one_and_update(
                    {native_id: entity_id},
                    {"$set": changes},
                    upsert=False,
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = coll.find_one({native_id: entity_id})
        except PyMongoError as e:
            raise MongoPersistenceError(str(e)) from e
        if doc is None:
            raise NotFoundError(
                entity_id, f"Cannot update; record {entity_id!r} does not exist"
            )
        return self._to_record(doc)

    def delete(self, entity_id: Any) -> bool:
        try:
            self._collection().delete_one({self._options.native_id_field: entity_id})
        except PyMongoError as e:
            raise MongoPersistenceError(str(e)) from e
        return True

"""MongoDB adapter: criteria translation, connection and data source."""

from __future__ import annotations

from .connection import MongoConnectionManager
from .criteria import CriteriaOutput, MongoCriteriaTranslator, translate
from .data_source import MongoDataSource, MongoDataSourceOptions
from .serialization import doc_to_record, record_to_doc

__all__ = [
    "MongoConnectionManager",
    "MongoDataSource",
    "MongoDataSourceOptions",
    "MongoCriteriaTranslator",
    "CriteriaOutput",
    "translate",
    "doc_to_record",
    "record_to_doc",
]

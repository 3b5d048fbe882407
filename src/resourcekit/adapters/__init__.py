"""Data source adapters.

``memory`` has no dependencies; ``mongo`` requires pymongo and is imported
explicitly (``from resourcekit.adapters.mongo import MongoDataSource``).
"""

from .memory import InMemoryDataSource

__all__ = ["InMemoryDataSource"]

from .data_source import InMemoryDataSource

__all__ = ["InMemoryDataSource"]

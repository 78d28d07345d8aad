"""Base query interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..graph import SymbolIndex

T = TypeVar("T")


class Query(ABC, Generic[T]):
    """Base query interface.

    All queries take an index and execute against it. Queries never
    modify the index.
    """

    def __init__(self, index: SymbolIndex):
        self.index = index

    @abstractmethod
    def execute(self, *args, **params) -> T:
        """Execute the query and return typed result."""
        pass

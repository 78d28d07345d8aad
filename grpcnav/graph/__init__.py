"""Graph module for loading and indexing symbol data."""

from .index import ProjectIndex
from .loader import load_index
from .protocol import SearchScope, SymbolIndex

__all__ = [
    "ProjectIndex",
    "load_index",
    "SearchScope",
    "SymbolIndex",
]

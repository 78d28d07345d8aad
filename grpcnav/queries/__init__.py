"""Query classes for grpcnav."""

from .base import Query
from .implementation import ImplementationQuery, resolve
from .candidates import CandidatesQuery
from .goto import GotoImplementationQuery, ACTION_TEXT
from .callsite import extract_call_site, find_call_sites, offset_for

__all__ = [
    "Query",
    "ImplementationQuery",
    "resolve",
    "CandidatesQuery",
    "GotoImplementationQuery",
    "ACTION_TEXT",
    "extract_call_site",
    "find_call_sites",
    "offset_for",
]

"""Data models for grpcnav."""

from .node import NodeData, CLASS_KINDS
from .edge import EdgeData
from .results import (
    CallSite,
    Candidate,
    Match,
    NotFound,
    ResolveOutcome,
    CandidatesResult,
    GotoResult,
    ROLE_SERVICE,
    ROLE_IMPL_BASE,
    ROLE_OTHER,
    BLANK_INPUT,
    MISSING_STUB_SUFFIX,
    NO_CANDIDATE,
    NO_IMPLEMENTATION_CLASS,
    METHOD_ABSENT,
)

__all__ = [
    "NodeData",
    "CLASS_KINDS",
    "EdgeData",
    "CallSite",
    "Candidate",
    "Match",
    "NotFound",
    "ResolveOutcome",
    "CandidatesResult",
    "GotoResult",
    "ROLE_SERVICE",
    "ROLE_IMPL_BASE",
    "ROLE_OTHER",
    "BLANK_INPUT",
    "MISSING_STUB_SUFFIX",
    "NO_CANDIDATE",
    "NO_IMPLEMENTATION_CLASS",
    "METHOD_ABSENT",
]

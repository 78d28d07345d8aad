"""grpcnav - jump from gRPC client stub calls to server implementations."""

from .config import ResolverConfig, AppConfig, load_config
from .graph import ProjectIndex, SearchScope, SymbolIndex
from .models import NodeData, EdgeData, CallSite, Match, NotFound
from .queries import (
    ImplementationQuery,
    CandidatesQuery,
    GotoImplementationQuery,
    resolve,
    extract_call_site,
)

__version__ = "0.1.0"

__all__ = [
    "ResolverConfig",
    "AppConfig",
    "load_config",
    "ProjectIndex",
    "SearchScope",
    "SymbolIndex",
    "NodeData",
    "EdgeData",
    "CallSite",
    "Match",
    "NotFound",
    "ImplementationQuery",
    "CandidatesQuery",
    "GotoImplementationQuery",
    "resolve",
    "extract_call_site",
]

"""Query result types."""

from dataclasses import dataclass, field
from typing import Optional, Union

from .node import NodeData

# Candidate roles
ROLE_SERVICE = "service"
ROLE_IMPL_BASE = "impl_base"
ROLE_OTHER = "other"

# NotFound reasons
BLANK_INPUT = "blank_input"
MISSING_STUB_SUFFIX = "missing_stub_suffix"
NO_CANDIDATE = "no_candidate"
NO_IMPLEMENTATION_CLASS = "no_implementation_class"
METHOD_ABSENT = "method_absent"


@dataclass(frozen=True)
class CallSite:
    """A `receiver.method(...)` expression found in source text."""

    receiver_name: str
    method_name: str
    receiver_text: str
    start: int
    end: int


@dataclass
class Candidate:
    """Class whose simple name contains the derived base name."""

    node: NodeData
    role: str  # "service", "impl_base", "other"
    has_method: Optional[bool] = None


@dataclass
class Match:
    """Implementation method chosen for a call site."""

    class_node: NodeData
    method_node: NodeData
    tier: int  # 1 = service class, 2 = generated base fallback

    @property
    def found(self) -> bool:
        return True


@dataclass
class NotFound:
    """Resolution failure with the reason it failed."""

    reason: str
    receiver_name: str
    method_name: str
    class_name: Optional[str] = None  # set for "method_absent"

    @property
    def found(self) -> bool:
        return False


ResolveOutcome = Union[Match, NotFound]


@dataclass
class CandidatesResult:
    """Candidate set for a receiver name."""

    receiver_name: str
    base_name: Optional[str]
    candidates: list[Candidate] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return len(self.candidates) > 0


@dataclass
class GotoResult:
    """Result of navigating from a source position."""

    call_site: Optional[CallSite]
    outcome: Optional[ResolveOutcome] = None
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return isinstance(self.outcome, Match)

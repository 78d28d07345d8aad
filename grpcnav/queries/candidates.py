"""Candidate listing query."""

from typing import Optional

from ..config import ResolverConfig
from ..graph import SearchScope, SymbolIndex
from ..models import Candidate, CandidatesResult
from .base import Query
from .implementation import classify_role, derive_base_name, find_candidates


class CandidatesQuery(Query[CandidatesResult]):
    """List the classes a receiver name could resolve to, with their roles."""

    def __init__(
        self,
        index: SymbolIndex,
        config: Optional[ResolverConfig] = None,
        scope: Optional[SearchScope] = None,
    ):
        super().__init__(index)
        self.config = config or ResolverConfig()
        self.scope = scope or SearchScope.all()

    def execute(self, receiver_name: str, method_name: Optional[str] = None) -> CandidatesResult:
        """Execute candidate listing.

        Args:
            receiver_name: Identifier holding the client stub.
            method_name: If given, each candidate records whether it has the method.

        Returns:
            CandidatesResult, with base_name None when the receiver is rejected.
        """
        receiver_name = (receiver_name or "").strip()
        base_name = None
        if receiver_name:
            base_name = derive_base_name(
                receiver_name, self.config.stub_policy, self.config.stub_suffix
            )
        if base_name is None:
            return CandidatesResult(receiver_name=receiver_name, base_name=None)

        entries = []
        for cls in find_candidates(self.index, base_name, self.scope, self.config.order):
            has_method = None
            if method_name:
                has_method = bool(self.index.find_methods_by_name(cls, method_name))
            entries.append(
                Candidate(node=cls, role=classify_role(cls.name, self.config), has_method=has_method)
            )

        return CandidatesResult(receiver_name=receiver_name, base_name=base_name, candidates=entries)

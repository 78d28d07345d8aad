"""Implementation resolution query.

Maps a client stub call such as `userServiceStub.getUser(...)` to the
server-side method implementing it, using gRPC naming conventions:

1. Strip the stub suffix from the receiver and lowercase it ("userservice").
2. Collect every class whose simple name contains that base name.
3. Prefer a `*GrpcService` class declaring the method.
4. Otherwise fall back to a generated `*ImplBase` / `*CoroutineImplBase`.
"""

import logging
from typing import Optional

from ..config import ResolverConfig
from ..graph import SearchScope, SymbolIndex
from ..models import (
    NodeData,
    Match,
    NotFound,
    ResolveOutcome,
    ROLE_SERVICE,
    ROLE_IMPL_BASE,
    ROLE_OTHER,
    BLANK_INPUT,
    MISSING_STUB_SUFFIX,
    NO_CANDIDATE,
    NO_IMPLEMENTATION_CLASS,
    METHOD_ABSENT,
)
from .base import Query

logger = logging.getLogger(__name__)

# Roles searched in priority order, with the tier number reported on a Match
_TIERS = ((1, ROLE_SERVICE), (2, ROLE_IMPL_BASE))


def derive_base_name(
    receiver_name: str, policy: str = "require", suffix: str = "Stub"
) -> Optional[str]:
    """Strip the stub suffix and lowercase the receiver name.

    The suffix is matched case-insensitively. Returns None when the policy
    requires the suffix and it is missing, or when nothing is left after
    stripping.
    """
    name = receiver_name.strip()
    if suffix and name.lower().endswith(suffix.lower()):
        name = name[: len(name) - len(suffix)]
    elif policy == "require":
        return None
    if not name:
        return None
    return name.lower()


def classify_role(class_name: str, config: ResolverConfig) -> str:
    """Classify a class name as service, generated base, or neither."""
    if class_name.endswith(config.service_suffix):
        return ROLE_SERVICE
    if any(class_name.endswith(s) for s in config.fallback_suffixes):
        return ROLE_IMPL_BASE
    return ROLE_OTHER


def find_candidates(
    index: SymbolIndex,
    base_name: str,
    scope: Optional[SearchScope] = None,
    order: str = "name",
) -> list[NodeData]:
    """Find classes whose simple name contains `base_name`, ignoring case.

    With order="index" the index's own enumeration order is kept, which is
    not guaranteed to be stable across index builds.
    """
    needle = base_name.lower()
    names = [name for name in index.all_class_names() if needle in name.lower()]
    classes = [cls for name in names for cls in index.classes_by_name(name, scope)]
    if order == "name":
        classes.sort(key=lambda c: (c.fqn, c.id))
    return classes


class ImplementationQuery(Query[ResolveOutcome]):
    """Resolve a stub call to its server implementation method."""

    def __init__(
        self,
        index: SymbolIndex,
        config: Optional[ResolverConfig] = None,
        scope: Optional[SearchScope] = None,
    ):
        super().__init__(index)
        self.config = config or ResolverConfig()
        self.scope = scope or SearchScope.all()

    def execute(self, receiver_name: str, method_name: str) -> ResolveOutcome:
        """Execute implementation resolution.

        Args:
            receiver_name: Identifier holding the client stub, e.g. "userServiceStub".
            method_name: Name of the called method, e.g. "getUser".

        Returns:
            Match on success, otherwise NotFound carrying the reason.
        """
        receiver_name = (receiver_name or "").strip()
        method_name = (method_name or "").strip()

        def not_found(reason: str, class_name: Optional[str] = None) -> NotFound:
            return NotFound(
                reason=reason,
                receiver_name=receiver_name,
                method_name=method_name,
                class_name=class_name,
            )

        if not receiver_name or not method_name:
            logger.debug("Blank receiver or method name, nothing to resolve")
            return not_found(BLANK_INPUT)

        base_name = derive_base_name(
            receiver_name, self.config.stub_policy, self.config.stub_suffix
        )
        if base_name is None:
            logger.info(
                "Receiver %s does not end with %r, skipping",
                receiver_name, self.config.stub_suffix,
            )
            return not_found(MISSING_STUB_SUFFIX)

        candidates = find_candidates(self.index, base_name, self.scope, self.config.order)
        logger.debug(
            "Candidates for base name %r: %s", base_name, [c.name for c in candidates]
        )
        if not candidates:
            logger.info("No class name contains %r", base_name)
            return not_found(NO_CANDIDATE)

        first_qualifying: Optional[NodeData] = None
        for tier, role in _TIERS:
            for cls in candidates:
                if classify_role(cls.name, self.config) != role:
                    continue
                if first_qualifying is None:
                    first_qualifying = cls
                methods = self.index.find_methods_by_name(cls, method_name, include_inherited=True)
                logger.debug(
                    "Checking tier %d class=%s, has_method=%s", tier, cls.fqn, bool(methods)
                )
                if methods:
                    logger.info("Matched %s::%s (tier %d)", cls.fqn, method_name, tier)
                    return Match(class_node=cls, method_node=methods[0], tier=tier)

        if first_qualifying is not None:
            logger.info("Method %s not found in implementation %s", method_name, first_qualifying.fqn)
            return not_found(METHOD_ABSENT, class_name=first_qualifying.name)

        logger.info("No implementation class among %d candidates", len(candidates))
        return not_found(NO_IMPLEMENTATION_CLASS)


def resolve(
    index: SymbolIndex,
    receiver_name: str,
    method_name: str,
    config: Optional[ResolverConfig] = None,
    scope: Optional[SearchScope] = None,
) -> Optional[Match]:
    """Resolve a stub call, returning the Match or None."""
    outcome = ImplementationQuery(index, config=config, scope=scope).execute(
        receiver_name, method_name
    )
    return outcome if isinstance(outcome, Match) else None

"""Protocol for symbol index implementations."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional, Protocol

from ..models import NodeData


@dataclass(frozen=True)
class SearchScope:
    """Set of files whose declarations are visible to a lookup.

    An empty `roots` tuple means every declaration is visible, including
    library and generated code.
    """

    roots: tuple[str, ...] = ()

    @classmethod
    def all(cls) -> "SearchScope":
        return cls()

    @classmethod
    def under(cls, *roots: str) -> "SearchScope":
        return cls(roots=tuple(roots))

    def contains(self, node: NodeData) -> bool:
        if not self.roots:
            return True
        if not node.file:
            return False
        # Whole path components only: "build/gen" does not cover "build/generated"
        path = PurePosixPath(node.file)
        return any(path.is_relative_to(root) for root in self.roots)


class SymbolIndex(Protocol):
    """Read-only symbol lookups the implementation resolver depends on.

    ProjectIndex is the canonical implementation. Anything providing these
    three operations can be resolved against, e.g. an editor's live index.
    """

    def all_class_names(self) -> list[str]:
        """Return every known simple class name, in enumeration order."""
        ...

    def classes_by_name(self, name: str, scope: Optional[SearchScope] = None) -> list[NodeData]:
        """Return class declarations with the given simple name visible in scope."""
        ...

    def find_methods_by_name(
        self, class_node: NodeData, method_name: str, include_inherited: bool = True
    ) -> list[NodeData]:
        """Return methods named exactly `method_name` on a class.

        With `include_inherited`, methods declared on supertypes are included
        after the class's own declarations.
        """
        ...

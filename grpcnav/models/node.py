"""Node data model."""

from dataclasses import dataclass
from typing import Optional

CLASS_KINDS = frozenset({"Class", "Interface", "Enum", "Object"})


@dataclass
class NodeData:
    """Declaration from a symbol index file."""

    id: str
    kind: str
    name: str
    fqn: str
    file: Optional[str] = None
    range: Optional[dict] = None

    @property
    def is_class(self) -> bool:
        return self.kind in CLASS_KINDS

    @property
    def is_method(self) -> bool:
        return self.kind == "Method"

    @property
    def start_line(self) -> Optional[int]:
        if self.range:
            return self.range.get("start_line")
        return None

    @property
    def start_col(self) -> Optional[int]:
        if self.range:
            return self.range.get("start_col")
        return None

    @property
    def location_str(self) -> str:
        """Return file:line string."""
        if self.file and self.start_line is not None:
            return f"{self.file}:{self.start_line + 1}"  # 1-based
        elif self.file:
            return self.file
        return "<unknown>"

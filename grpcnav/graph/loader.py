"""JSON loading utilities for symbol index files.

Uses msgspec for typed decoding; a file that does not match the schema fails
at load time instead of deep inside a query.
"""

from pathlib import Path
from typing import Optional

import msgspec


class NodeSpec(msgspec.Struct, omit_defaults=True):
    """Node specification in the index JSON."""

    id: str
    kind: str
    name: str
    fqn: str
    file: Optional[str] = None
    range: Optional[dict] = None  # {"start_line", "start_col", "end_line", "end_col"}, 0-based


class EdgeSpec(msgspec.Struct, omit_defaults=True):
    """Edge specification in the index JSON."""

    type: str
    source: str
    target: str


class IndexSpec(msgspec.Struct, omit_defaults=True):
    """Full symbol index JSON specification."""

    version: str = "1.0"
    metadata: dict = {}
    nodes: list[NodeSpec] = []
    edges: list[EdgeSpec] = []


# Create reusable decoder for performance
_decoder = msgspec.json.Decoder(IndexSpec)


def load_index(path: str | Path) -> IndexSpec:
    """Load a symbol index JSON file.

    Args:
        path: Path to the index JSON file.

    Returns:
        Parsed IndexSpec struct.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
        msgspec.ValidationError: If the JSON doesn't match the index schema.
    """
    with open(path, "rb") as f:
        return _decoder.decode(f.read())

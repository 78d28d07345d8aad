"""Project index for symbol lookups."""

import logging
from collections import defaultdict, deque
from pathlib import Path
from typing import Optional

from .loader import IndexSpec, load_index
from .protocol import SearchScope
from ..models import NodeData, EdgeData

logger = logging.getLogger(__name__)


class ProjectIndex:
    """In-memory index over a symbol index JSON file.

    Implements the SymbolIndex protocol. Class names are enumerated in the
    order they first appear in the file.
    """

    def __init__(self, index_path: str | Path):
        """Initialize the index.

        Args:
            index_path: Path to the symbol index JSON file.
        """
        self.index_path = Path(index_path)
        self._load(load_index(self.index_path))
        self._build_indexes()
        logger.debug(
            "Loaded %s: %d nodes, %d edges, %d class names",
            self.index_path, len(self.nodes), len(self.edges), len(self._class_names),
        )

    def _load(self, data: IndexSpec):
        self.version = data.version
        self.metadata = data.metadata

        self.nodes: dict[str, NodeData] = {}
        for n in data.nodes:
            node = NodeData(
                id=n.id,
                kind=n.kind,
                name=n.name,
                fqn=n.fqn,
                file=n.file,
                range=n.range,
            )
            self.nodes[node.id] = node

        self.edges: list[EdgeData] = [
            EdgeData(type=e.type, source=e.source, target=e.target)
            for e in data.edges
        ]

    def _build_indexes(self):
        """Build lookup indexes."""
        # Simple class name to node IDs; dict keeps first-seen order
        self._class_names: dict[str, None] = {}
        self.name_to_class_ids: dict[str, list[str]] = defaultdict(list)

        for node_id, node in self.nodes.items():
            if node.is_class:
                self._class_names.setdefault(node.name, None)
                self.name_to_class_ids[node.name].append(node_id)

        # Class ID to declared method IDs, and to direct supertype IDs
        self.methods: dict[str, list[str]] = defaultdict(list)
        self.supertypes: dict[str, list[str]] = defaultdict(list)

        for edge in self.edges:
            if edge.type == "contains":
                target = self.nodes.get(edge.target)
                if target and target.is_method:
                    self.methods[edge.source].append(edge.target)
            elif edge.type in ("extends", "implements"):
                self.supertypes[edge.source].append(edge.target)

    # SymbolIndex protocol

    def all_class_names(self) -> list[str]:
        return list(self._class_names)

    def classes_by_name(self, name: str, scope: Optional[SearchScope] = None) -> list[NodeData]:
        scope = scope or SearchScope.all()
        return [
            self.nodes[node_id]
            for node_id in self.name_to_class_ids.get(name, [])
            if scope.contains(self.nodes[node_id])
        ]

    def find_methods_by_name(
        self, class_node: NodeData, method_name: str, include_inherited: bool = True
    ) -> list[NodeData]:
        found = []
        to_visit = deque([class_node.id])
        visited = {class_node.id}

        while to_visit:
            current = to_visit.popleft()
            for method_id in self.methods.get(current, []):
                method = self.nodes[method_id]
                if method.name == method_name:
                    found.append(method)
            if not include_inherited:
                break
            for parent_id in self.supertypes.get(current, []):
                # Supertypes outside the index (e.g. JDK classes) are skipped
                if parent_id not in visited and parent_id in self.nodes:
                    visited.add(parent_id)
                    to_visit.append(parent_id)

        return found

    # Convenience lookups

    def get_methods(self, class_id: str) -> list[NodeData]:
        """Get methods declared directly on a class."""
        return [self.nodes[m] for m in self.methods.get(class_id, [])]

    def get_supertypes(self, class_id: str) -> list[str]:
        """Get IDs of the classes/interfaces a class extends or implements."""
        return list(self.supertypes.get(class_id, []))

"""Edge data model."""

from dataclasses import dataclass


@dataclass
class EdgeData:
    """Edge from a symbol index file.

    Types used by the resolver: "contains" (class -> method) and
    "extends"/"implements" (subtype -> supertype). Other types are kept but
    not interpreted.
    """

    type: str
    source: str
    target: str

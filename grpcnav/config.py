"""Configuration file support.

Config file format (grpcnav.json):
    {
        "projects": [
            {"name": "orders", "index": "indexes/orders.json"}
        ],
        "resolver": {
            "stub_policy": "require",
            "order": "name",
            "service_suffix": "GrpcService",
            "fallback_suffixes": ["ImplBase", "CoroutineImplBase"]
        }
    }

Relative index paths are resolved against the config file's directory.
"""

from pathlib import Path
from typing import Literal

import msgspec

# "require": receivers must end with the stub suffix; "strip": strip it if present
StubPolicy = Literal["require", "strip"]
# "name": lexicographic on FQN; "index": whatever order the index enumerates
CandidateOrder = Literal["name", "index"]


class ResolverConfig(msgspec.Struct, omit_defaults=True, forbid_unknown_fields=True):
    """Naming conventions and tie-breaking used by the resolver."""

    stub_policy: StubPolicy = "require"
    order: CandidateOrder = "name"
    stub_suffix: str = "Stub"
    service_suffix: str = "GrpcService"
    fallback_suffixes: tuple[str, ...] = ("ImplBase", "CoroutineImplBase")


class ProjectConfig(msgspec.Struct, forbid_unknown_fields=True):
    """A named symbol index."""

    name: str
    index: str


class AppConfig(msgspec.Struct, omit_defaults=True, forbid_unknown_fields=True):
    """Top-level config file."""

    projects: list[ProjectConfig] = []
    resolver: ResolverConfig = msgspec.field(default_factory=ResolverConfig)


_decoder = msgspec.json.Decoder(AppConfig)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate a config file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
        msgspec.ValidationError: On unknown fields or invalid policy/order values.
        ValueError: If project names are empty or duplicated.
    """
    path = Path(path)
    with open(path, "rb") as f:
        config = _decoder.decode(f.read())

    seen: set[str] = set()
    projects = []
    for proj in config.projects:
        if not proj.name or not proj.index:
            raise ValueError("Each project must have 'name' and 'index' fields")
        if proj.name in seen:
            raise ValueError(f"Duplicate project name: {proj.name}")
        seen.add(proj.name)

        index_path = Path(proj.index)
        if not index_path.is_absolute():
            index_path = path.parent / index_path
        projects.append(msgspec.structs.replace(proj, index=str(index_path)))

    return msgspec.structs.replace(config, projects=projects)


def override(config: ResolverConfig, **changes) -> ResolverConfig:
    """Return a validated copy of `config` with the non-None `changes` applied.

    Raises:
        msgspec.ValidationError: If a change has an invalid value.
    """
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        return config
    data = msgspec.structs.asdict(config)
    data.update(changes)
    return msgspec.convert(data, ResolverConfig)

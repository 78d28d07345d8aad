"""MCP (Model Context Protocol) server for grpcnav.

Implements JSON-RPC 2.0 based MCP protocol for Claude and other MCP clients.

Usage:
    grpcnav mcp-server --index /path/to/index.json
    grpcnav mcp-server --config /path/to/grpcnav.json

Config file format: see grpcnav.config.
"""

import json
import logging
import sys
from typing import Any, Optional, TextIO

from ..config import ResolverConfig, load_config, override
from ..graph import ProjectIndex, SearchScope
from ..output import candidates_to_dict, goto_to_dict, outcome_to_dict
from ..output.json_formatter import to_json
from ..queries import (
    ImplementationQuery,
    CandidatesQuery,
    GotoImplementationQuery,
    offset_for,
)

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_VERSION = "0.1.0"


class MCPServer:
    """MCP server for grpcnav with multi-project support."""

    def __init__(self, config_path: Optional[str] = None, index_path: Optional[str] = None):
        """Initialize server with config file or single index path.

        Args:
            config_path: Path to JSON config file with multiple projects
            index_path: Path to single index file (creates default project)
        """
        self._projects: dict[str, str] = {}  # name -> index path
        self._indexes: dict[str, ProjectIndex] = {}  # name -> index (lazy loaded)
        self.resolver_config = ResolverConfig()

        if config_path:
            config = load_config(config_path)
            if not config.projects:
                raise ValueError("Config file must contain at least one project")
            self._projects = {p.name: p.index for p in config.projects}
            self.resolver_config = config.resolver
        elif index_path:
            self._projects["default"] = index_path
        else:
            raise ValueError("Either config_path or index_path must be provided")

    def _get_index(self, project: Optional[str] = None) -> ProjectIndex:
        """Get index for a project (lazy-loaded).

        Args:
            project: Project name. If None, uses default (only if single project).
        """
        if project is None:
            if len(self._projects) == 1:
                project = next(iter(self._projects))
            else:
                raise ValueError(f"Multiple projects configured. Specify 'project' parameter. Available: {list(self._projects)}")

        if project not in self._projects:
            raise ValueError(f"Unknown project: {project}. Available: {list(self._projects)}")

        if project not in self._indexes:
            logger.info("Loading index for project %s", project)
            self._indexes[project] = ProjectIndex(self._projects[project])

        return self._indexes[project]

    def _query_args(self, args: dict) -> dict:
        """Index, resolver config and scope for a tool call."""
        return {
            "index": self._get_index(args.get("project")),
            "config": override(
                self.resolver_config,
                stub_policy=args.get("stub_policy"),
                order=args.get("order"),
            ),
            "scope": SearchScope.under(*args["scope"]) if args.get("scope") else SearchScope.all(),
        }

    def get_projects(self) -> list[dict]:
        """Return list of configured projects."""
        return [{"name": name, "index": path} for name, path in self._projects.items()]

    def get_tools(self) -> list[dict]:
        """Return list of available MCP tools."""
        # Properties shared by the resolving tools
        common = {
            "project": {"type": "string", "description": "Project name (required if multiple projects configured)"},
            "stub_policy": {"type": "string", "enum": ["require", "strip"], "description": "Whether receivers must end with 'Stub'"},
            "order": {"type": "string", "enum": ["name", "index"], "description": "Candidate tie-break order"},
            "scope": {"type": "array", "items": {"type": "string"}, "description": "Only search files under these path prefixes"},
        }

        return [
            {
                "name": "grpcnav_projects",
                "description": "List all configured projects. Use this to discover available projects before querying.",
                "inputSchema": {
                    "type": "object",
                    "properties": {},
                    "required": [],
                },
            },
            {
                "name": "grpcnav_resolve",
                "description": "Resolve a gRPC stub call (receiver.method) to the server method implementing it.",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "receiver": {"type": "string", "description": "Receiver holding the stub, e.g. userServiceStub"},
                        "method": {"type": "string", "description": "Called method name"},
                        **common,
                    },
                    "required": ["receiver", "method"],
                },
            },
            {
                "name": "grpcnav_candidates",
                "description": "List the classes a stub receiver could resolve to, with their roles.",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "receiver": {"type": "string", "description": "Receiver holding the stub"},
                        "method": {"type": "string", "description": "Optional method to check on each candidate"},
                        **common,
                    },
                    "required": ["receiver"],
                },
            },
            {
                "name": "grpcnav_goto",
                "description": "Find the stub call at a 1-based line/column in source text and resolve it.",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "source": {"type": "string", "description": "Full source text"},
                        "line": {"type": "integer", "description": "1-based line"},
                        "col": {"type": "integer", "description": "1-based column"},
                        **common,
                    },
                    "required": ["source", "line", "col"],
                },
            },
        ]

    def call_tool(self, name: str, arguments: dict) -> Any:
        """Call a tool by name."""
        handlers = {
            "grpcnav_projects": self._handle_projects,
            "grpcnav_resolve": self._handle_resolve,
            "grpcnav_candidates": self._handle_candidates,
            "grpcnav_goto": self._handle_goto,
        }
        handler = handlers.get(name)
        if not handler:
            raise ValueError(f"Unknown tool: {name}")
        return handler(arguments)

    def _handle_projects(self, args: dict) -> dict:
        """List all configured projects."""
        return {"projects": self.get_projects()}

    def _handle_resolve(self, args: dict) -> dict:
        query = ImplementationQuery(**self._query_args(args))
        return outcome_to_dict(query.execute(args["receiver"], args["method"]))

    def _handle_candidates(self, args: dict) -> dict:
        query = CandidatesQuery(**self._query_args(args))
        return candidates_to_dict(query.execute(args["receiver"], args.get("method")))

    def _handle_goto(self, args: dict) -> dict:
        source = args["source"]
        offset = offset_for(source, int(args["line"]), int(args["col"]))
        query = GotoImplementationQuery(**self._query_args(args))
        return goto_to_dict(query.execute(source, offset))


def run_mcp_server(
    config_path: Optional[str] = None,
    index_path: Optional[str] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
):
    """Run the MCP server using stdio with JSON-RPC 2.0 protocol.

    Args:
        config_path: Path to JSON config file with multiple projects
        index_path: Path to single index file (creates default project)
        stdin: Request stream (default sys.stdin)
        stdout: Response stream (default sys.stdout)
    """
    server = MCPServer(config_path=config_path, index_path=index_path)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    def send_response(id: Any, result: Any = None, error: Any = None):
        response = {"jsonrpc": "2.0", "id": id}
        if error is not None:
            response["error"] = {"code": -32000, "message": str(error)}
        else:
            response["result"] = result
        print(json.dumps(response), file=stdout, flush=True)

    for line in stdin:
        line = line.strip()
        if not line:
            continue

        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            send_response(None, error=f"Parse error: {e}")
            continue

        if not isinstance(request, dict):
            send_response(None, error="Invalid Request: expected a JSON object")
            continue

        req_id = request.get("id")
        method = request.get("method", "")
        params = request.get("params", {})

        try:
            if method == "initialize":
                send_response(req_id, {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": "grpcnav", "version": SERVER_VERSION}
                })
            elif method == "notifications/initialized":
                pass  # No response needed for notifications
            elif method == "tools/list":
                send_response(req_id, {"tools": server.get_tools()})
            elif method == "tools/call":
                tool_name = params.get("name", "")
                arguments = params.get("arguments", {})
                result = server.call_tool(tool_name, arguments)
                send_response(req_id, {"content": [{"type": "text", "text": to_json(result)}]})
            elif method == "ping":
                send_response(req_id, {})
            else:
                send_response(req_id, error=f"Method not found: {method}")
        except Exception as e:
            logger.warning("Request %s failed: %s", method, e)
            send_response(req_id, error=str(e))

"""Minimal Model Context Protocol (MCP) server for the naming engine."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from core import naming_rules
from core.name_service import (
    NamingValidationError,
    ResourceTypeNotFoundError,
    UnknownSanitizationClassError,
    generate_names,
    lookup_name,
)
from core.resource_types import DEFAULT_RESOURCE_TYPES
from core.sanitizer import sanitize
from tools.lib import resolve_log_level, setup_logging

logger = logging.getLogger(__name__)

_NAMING_PAYLOAD_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "description": "Payload accepted by the /api/names endpoint.",
    "properties": {
        "prefix": {"type": "string"},
        "suffix": {"type": "string"},
        "environment": {"type": "string"},
        "region": {"type": "string"},
        "customResourceTypes": {"type": "object", "additionalProperties": {"type": "string"}},
        "nameSuffixes": {"type": "array", "items": {"type": "string"}},
        "createdOn": {"type": "string"},
        "tags": {"type": "object", "additionalProperties": {"type": "string"}},
    },
}


@dataclass
class ToolSpec:
    """Description for a tool exposed over MCP."""

    name: str
    description: str
    schema: Mapping[str, Any]
    handler: Callable[[Mapping[str, Any]], Any]


class MCPError(Exception):
    """Exception raised for protocol errors returned to the caller."""

    def __init__(self, code: int, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class NamingMCPServer:
    """Implements a subset of the MCP JSON-RPC protocol over stdin/stdout."""

    protocol_version = "2024-05-01"

    def __init__(self) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._register_tools()

    # ------------------------------------------------------------------
    # Tool registration
    def _register_tools(self) -> None:
        self._tools = {
            "generate_names": ToolSpec(
                name="generate_names",
                description="Generate sanitized names and suffix variants for every resource type.",
                schema={
                    "type": "object",
                    "properties": {"payload": _NAMING_PAYLOAD_SCHEMA},
                    "required": ["payload"],
                },
                handler=self._handle_generate,
            ),
            "lookup_name": ToolSpec(
                name="lookup_name",
                description="Generate the name for a single resource type.",
                schema={
                    "type": "object",
                    "properties": {
                        "payload": _NAMING_PAYLOAD_SCHEMA,
                        "resource_type": {"type": "string"},
                        "class": {"type": "string", "default": "general"},
                    },
                    "required": ["payload", "resource_type"],
                },
                handler=self._handle_lookup,
            ),
            "sanitize_name": ToolSpec(
                name="sanitize_name",
                description="Sanitize an arbitrary name for a sanitization class.",
                schema={
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "class": {"type": "string", "default": "general"},
                    },
                    "required": ["name"],
                },
                handler=self._handle_sanitize,
            ),
            "list_resource_types": ToolSpec(
                name="list_resource_types",
                description="Return the built-in resource types and the sanitization classes.",
                schema={"type": "object", "properties": {}},
                handler=self._handle_list,
            ),
        }

    # ------------------------------------------------------------------
    # JSON-RPC handlers
    async def handle(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        method = request.get("method")
        request_id = request.get("id")

        try:
            if method == "initialize":
                result = self._initialize()
            elif method == "list_tools":
                result = self._list_tools()
            elif method == "call_tool":
                params = request.get("params") or {}
                tool = params.get("name")
                args = params.get("arguments") or {}
                result = self._call_tool(tool, args)
            elif method == "shutdown":
                result = {"ok": True}
            else:
                raise MCPError(-32601, f"Unknown method: {method}")
        except MCPError as exc:
            error: Dict[str, Any] = {"code": exc.code, "message": exc.message}
            if exc.data:
                error["data"] = dict(exc.data)
            return {"jsonrpc": "2.0", "id": request_id, "error": error}
        except Exception as exc:  # pragma: no cover - reported to the caller
            logger.exception("Unhandled MCP server error")
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {"code": -32000, "message": str(exc)},
            }

        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _initialize(self) -> Dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "serverInfo": {"name": "hubspoke-naming", "version": "1.0"},
            "capabilities": {"tools": {"list": True, "call": True}},
        }

    def _list_tools(self) -> Dict[str, Any]:
        return {
            "tools": [
                {"name": spec.name, "description": spec.description, "inputSchema": spec.schema}
                for spec in self._tools.values()
            ]
        }

    def _call_tool(self, name: str, arguments: Mapping[str, Any]) -> Any:
        if not name:
            raise MCPError(-32602, "Tool name is required")
        spec = self._tools.get(name)
        if not spec:
            raise MCPError(-32601, f"Unknown tool: {name}")
        try:
            return spec.handler(arguments)
        except NamingValidationError as exc:
            raise MCPError(-32602, str(exc), exc.to_dict()) from exc
        except ResourceTypeNotFoundError as exc:
            raise MCPError(404, str(exc), exc.to_dict()) from exc
        except UnknownSanitizationClassError as exc:
            raise MCPError(-32602, exc.message) from exc

    # ------------------------------------------------------------------
    # Tool implementations
    @staticmethod
    def _payload(arguments: Mapping[str, Any]) -> Dict[str, Any]:
        payload = arguments.get("payload")
        if not isinstance(payload, Mapping):
            raise MCPError(-32602, "payload must be an object")
        data = dict(payload)
        if not data.get("createdOn") and not data.get("created_on"):
            data["created_on"] = datetime.now(timezone.utc).isoformat()
        return data

    def _handle_generate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        return generate_names(self._payload(arguments)).to_dict()

    def _handle_lookup(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        resource_type = str(arguments.get("resource_type") or "").strip()
        if not resource_type:
            raise MCPError(-32602, "resource_type is required")
        sanitization_class = str(arguments.get("class") or "general")
        return lookup_name(self._payload(arguments), resource_type, sanitization_class)

    def _handle_sanitize(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        name = arguments.get("name")
        if not isinstance(name, str):
            raise MCPError(-32602, "name must be a string")
        sanitization_class = str(arguments.get("class") or "general")
        return {"name": name, "class": sanitization_class.lower(), "sanitized": sanitize(name, sanitization_class)}

    def _handle_list(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "resourceTypes": dict(DEFAULT_RESOURCE_TYPES),
            "classes": list(naming_rules.list_sanitization_classes()),
        }


async def _readline(reader: asyncio.StreamReader) -> Optional[str]:
    line = await reader.readline()
    if not line:
        return None
    return line.decode("utf-8").strip()


async def run_stdio_server(server: NamingMCPServer) -> None:
    """Run the MCP server over stdio until EOF or shutdown."""

    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    writer_transport, writer_protocol = await loop.connect_write_pipe(asyncio.streams.FlowControlMixin, sys.stdout)
    writer = asyncio.StreamWriter(writer_transport, writer_protocol, reader, loop)

    while True:
        line = await _readline(reader)
        if line is None:
            break
        if not line:
            continue
        try:
            request = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Ignoring invalid JSON payload: %s", line)
            continue

        response = await server.handle(request)
        writer.write(json.dumps(response).encode("utf-8") + b"\n")
        await writer.drain()

        if request.get("method") == "shutdown":
            break

    writer.close()


def main() -> None:
    setup_logging(resolve_log_level(default=logging.INFO))
    asyncio.run(run_stdio_server(NamingMCPServer()))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()

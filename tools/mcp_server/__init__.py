"""Model Context Protocol server exposing the naming engine."""

from .server import NamingMCPServer, run_stdio_server

__all__ = ["NamingMCPServer", "run_stdio_server"]

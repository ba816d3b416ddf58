from __future__ import annotations


class MCPError(RuntimeError):
    pass


class MCPProtocolError(MCPError):
    """A frame or message that does not follow Content-Length framed JSON-RPC."""

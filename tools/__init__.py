"""Tool wrappers for external data services."""

from . import dexscreener_client, filter_tool

__all__ = [
	"dexscreener_client",
	"filter_tool",
]

"""
Server package for the chat relay.

This package contains all server-side functionality including:
- Connection acceptance and server lifecycle
- Client registry and per-connection sessions
- Bounded message history
- Broadcast fan-out
- Configuration and utilities
"""

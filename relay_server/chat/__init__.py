"""
Chat module for server-side relay functionality.

Handles:
- Client registry
- Message history management
- Per-connection sessions
- Message broadcasting
"""

"""
Client package for the chat relay.

This package contains the client-side functionality:
- Connecting to the relay server
- Sending chat text and receiving relayed messages
- Configuration and utilities
"""

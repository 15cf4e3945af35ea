"""
Shared package for the chat relay.

Contains the constants and wire-text definitions used by both the
server and the client.
"""

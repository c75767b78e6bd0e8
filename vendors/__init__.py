"""Clients for the third-party HTTP APIs this server wraps."""

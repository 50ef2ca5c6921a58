"""Harmonic MCP stdio service."""

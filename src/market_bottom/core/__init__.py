"""Core business logic — scoring, data producers, API client, and data models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework. The server only calls into it.
"""

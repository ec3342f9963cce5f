"""
API module for the Channel Video System.

This module provides the FastAPI application serving catalog reads and
content redirects.
"""

from .server import APIServer

__all__ = ["APIServer"]

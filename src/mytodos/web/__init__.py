"""
MyTODOs Web Module

This module provides the REST API serving the in-memory task store.
"""

from .server import app, create_app, start_server

__all__ = ['app', 'create_app', 'start_server']

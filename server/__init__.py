"""
server — HTTP transport
=======================

Modules
-------
http_api
    :func:`create_app` FastAPI application over the tracking core.
"""

from .http_api import create_app

__all__ = ["create_app"]

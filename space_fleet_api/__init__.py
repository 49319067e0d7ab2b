"""
Top-level package for the Space Fleet API.

All functionality lives in submodules under ``app``; the ASGI
application is ``space_fleet_api.app.main:app``.
"""

__all__ = []

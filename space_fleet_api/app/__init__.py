"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: configuration and persistence in ``core``, storage in
``repositories``, payload models in ``schemas``, business rules in
``services`` and HTTP routes under ``api/<version>/``.
"""

from .main import app  # noqa: F401

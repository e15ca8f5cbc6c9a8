"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  The layout mirrors a typical FastAPI service: settings,
logging and database helpers live in ``core``, request/response
models in ``schemas``, business logic in ``services`` and HTTP
routes under ``api/<version>/``.
"""

from .main import app  # noqa: F401

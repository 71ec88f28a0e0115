"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, database, logging, metrics,
errors), ``repositories`` (SQLite persistence), ``services`` (business
rules), ``schemas`` (request and response models) and ``api``
(versioned routers).
"""

from .main import app  # noqa: F401

"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, store access and
errors), ``schemas`` (request/response models), ``services``
(operations on dog records) and ``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401

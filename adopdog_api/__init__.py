"""
Top‑level package for the Adoption Dog API.

This file makes ``adopdog_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``adopdog_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []

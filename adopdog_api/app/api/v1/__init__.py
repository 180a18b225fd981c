"""
Version 1 of the API.

This subpackage bundles the dog listing endpoints together with the
informational endpoint.
"""

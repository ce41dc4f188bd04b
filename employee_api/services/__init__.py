"""
High-level use cases for the employee API.

Routers (FastAPI endpoints) call these services instead of manipulating the
in-memory map or the JSON file directly.
"""

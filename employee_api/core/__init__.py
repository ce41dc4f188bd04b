"""
Core utilities shared across the employee API.

This package hosts configuration helpers (env vars, storage paths) and the
logging setup. Services and routers depend on these primitives instead of
reading os.environ directly.
"""

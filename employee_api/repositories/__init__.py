"""
Persistence adapters.

These modules encapsulate how employees are stored/retrieved (today a single
JSON file). Services depend on the storage object they are handed rather than
touching the file themselves.
"""

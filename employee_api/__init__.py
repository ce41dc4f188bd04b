"""Employee registry service: a tiny CRUD API over a whole-file JSON store."""

__version__ = "0.1.0"

"""Per-dealer question and answer content stored with SQLAlchemy and served over HTTP with Flask."""

__version__ = "0.1.0"
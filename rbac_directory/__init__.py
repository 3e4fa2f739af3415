"""In-memory role-based access control directory."""

__version__ = "0.1.0"

"""In-memory query and pipeline engine for task collections."""

__version__ = "0.1.0"

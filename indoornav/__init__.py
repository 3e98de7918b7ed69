"""Indoor multi-floor routing: map graph, shortest routes and narration."""

__version__ = "0.1.0"

"""Generate work reports from local git commit history."""

__version__ = "0.1.0"

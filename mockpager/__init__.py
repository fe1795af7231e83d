"""Mock HTTP server that serves paginated JSON responses from a configuration file."""

__version__ = "0.1.0"
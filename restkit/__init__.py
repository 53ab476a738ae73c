"""Building blocks for REST clients: URL encoding, chunked readers, I/O timers, JSON serialization and a client runner."""

__version__ = "0.1.0"
"""Track how long chosen programs run, controlled over a TCP connection."""

__version__ = "0.1.0"
__all__ = ["commands", "filesystem", "process_data", "processes", "state", "networking", "server"]
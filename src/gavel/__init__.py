"""gavel: time-boxed auction backend with an HTTP/JSON API and an admin CLI."""

__version__ = "0.3.0"

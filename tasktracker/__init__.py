"""Personal task tracker: REST API and Python client."""

__version__ = "0.1.0"

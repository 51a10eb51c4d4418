"""Static server for the registry console single-page app."""

__version__ = "1.0.0"

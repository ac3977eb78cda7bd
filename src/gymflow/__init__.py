"""gymflow: weekly routine scheduling and workout progress tracking."""

__version__ = "0.1.0"

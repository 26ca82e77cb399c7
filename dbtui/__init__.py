"""Terminal database browser widgets and AI-assisted SQL generation."""

__version__ = "0.1.0"
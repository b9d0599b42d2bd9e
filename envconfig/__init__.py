"""envconfig - resolve environment and secret placeholders in config files."""

__version__ = "1.0.0"

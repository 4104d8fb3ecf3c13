"""Command-line parsers and configuration classes built from TOML descriptions of settings."""

__version__ = "0.1.8"
__all__ = ["spec", "args", "cli"]
"""Generate VS Code themes from a base color and annotate delimiter regions."""

__version__ = "0.1.0"

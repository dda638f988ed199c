"""JSONVista - interactive JSON graph viewer with inline value editing."""

__version__ = "0.3.0"

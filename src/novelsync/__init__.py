"""Novelsync - cursor-based sync server and offline client for novel drafts."""

__version__ = "0.1.0"
__all__ = ["__version__"]

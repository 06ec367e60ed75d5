"""Sync server package."""

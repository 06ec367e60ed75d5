"""Service layer for the sync server."""

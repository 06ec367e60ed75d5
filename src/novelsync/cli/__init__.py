"""Offline CLI client."""

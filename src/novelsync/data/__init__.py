"""Persistence layer: clock, models and repositories."""

"""Exceptions raised by the sync server."""


class SyncError(Exception):
    """Base class for sync failures surfaced to clients."""


class StoreFailure(SyncError):
    """The keyed store could not apply an upsert or run a range query.

    On push this guarantees that no record of the batch was applied.
    """

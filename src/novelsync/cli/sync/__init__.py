"""Client side of the push/pull protocol."""

from novelsync.cli.sync.protocol import SyncClient, SyncProtocol, SyncResult

__all__ = ["SyncClient", "SyncProtocol", "SyncResult"]

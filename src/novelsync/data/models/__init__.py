"""Data models package."""

from novelsync.data.models.base import Base, VersionedMixin, VersionedModel
from novelsync.data.models.chapter import Chapter
from novelsync.data.models.idea import Idea
from novelsync.data.models.novel import Novel
from novelsync.data.models.user import User
from novelsync.data.models.volume import Volume

__all__ = [
    "Base",
    "Chapter",
    "Idea",
    "Novel",
    "User",
    "VersionedMixin",
    "VersionedModel",
    "Volume",
]

"""Repositories package."""

from novelsync.data.repositories.base import EntityStore, VersionedRepository
from novelsync.data.repositories.chapter import ChapterRepository
from novelsync.data.repositories.idea import IdeaRepository
from novelsync.data.repositories.novel import NovelRepository
from novelsync.data.repositories.user import UserRepository
from novelsync.data.repositories.volume import VolumeRepository

__all__ = [
    "ChapterRepository",
    "EntityStore",
    "IdeaRepository",
    "NovelRepository",
    "UserRepository",
    "VersionedRepository",
    "VolumeRepository",
]

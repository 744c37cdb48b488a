"""Repository package exposing persistence-layer access for the diary models."""

from __future__ import annotations

from dalgona.repositories.account import AccountRepository
from dalgona.repositories.base import BaseRepository, parse_sort_tokens
from dalgona.repositories.diary import DiaryRepository
from dalgona.repositories.profile import UserProfileRepository

__all__ = [
    "BaseRepository",
    "parse_sort_tokens",
    "AccountRepository",
    "DiaryRepository",
    "UserProfileRepository",
]

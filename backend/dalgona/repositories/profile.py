"""Repository for rows of the ``users`` (profile) collection."""

from __future__ import annotations

from dalgona.models.profile import UserProfile
from dalgona.repositories.base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    model = UserProfile
    filterable = {
        "id": UserProfile.id,
        "email": UserProfile.email,
        "nickname": UserProfile.nickname,
    }
    sortable = {"nickname": UserProfile.nickname, "created_at": UserProfile.created_at}
    # email mirrors the account and is never edited here
    updatable = frozenset({"nickname", "name"})

from dalgona.models.account import Account
from dalgona.models.diary import DiaryEntry
from dalgona.models.profile import UserProfile

__all__ = [
    "Account",
    "DiaryEntry",
    "UserProfile",
]

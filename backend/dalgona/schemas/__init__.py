"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, ProfileSchema, SignUpResultSchema, SignUpSchema, TokenResponseSchema
from .common import BaseSchema, MonthQuerySchema, PeriodSchema
from .diary import DiaryEntryCreateSchema, DiaryEntrySchema, DiaryEntryUpdateSchema
from .emotion import EmotionTallySchema, MonthlyEmotionSchema

__all__ = [
    "BaseSchema",
    "DiaryEntryCreateSchema",
    "DiaryEntrySchema",
    "DiaryEntryUpdateSchema",
    "EmotionTallySchema",
    "LoginSchema",
    "MonthQuerySchema",
    "MonthlyEmotionSchema",
    "PeriodSchema",
    "ProfileSchema",
    "SignUpResultSchema",
    "SignUpSchema",
    "TokenResponseSchema",
]

"""Pydantic response models for achievement endpoints."""

from __future__ import annotations

from cryptosports.db.models import Achievement, CamelModel, UserAchievement


class UserAchievementWithDetails(UserAchievement):
    achievement: Achievement


class AchievementCheckResponse(CamelModel):
    achievements: list[UserAchievementWithDetails]
    newly_completed: list[UserAchievementWithDetails]

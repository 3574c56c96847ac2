from __future__ import annotations

import datetime
import re
from typing import Annotated, Any, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")
URL_RE = re.compile(r"^https?://\S+$")


def _check_email(value: str) -> str:
    if not EMAIL_RE.match(value):
        raise ValueError("invalid email address")
    return value


def _check_url(value: str) -> str:
    if not URL_RE.match(value):
        raise ValueError("youtubeUrl must be an http(s) URL")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Url = Annotated[str, AfterValidator(_check_url)]
ItemType = Literal["exercise", "superset", "circuit"]
Category = Literal["weights", "cardio", "hiit", "plyometric", "mobility"]
Role = Literal["USER", "ADMIN"]


class SetPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reps: Optional[float] = None
    weight: Optional[float] = None
    durationSec: Optional[float] = None
    distanceM: Optional[float] = None
    intervals: Optional[float] = None
    workSec: Optional[float] = None
    restSec: Optional[float] = None
    notes: Optional[str] = None


class GroupItemPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    exerciseId: int
    orderIndex: int = 0
    sets: List[SetPayload] = Field(default_factory=list)


class ItemPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    itemType: ItemType
    exerciseId: Optional[int] = None
    # ignored on write; order comes from array position
    orderIndex: int = 0
    sets: List[SetPayload] = Field(default_factory=list)
    groupItems: List[GroupItemPayload] = Field(default_factory=list)


class WorkoutPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: str
    title: Optional[str] = None
    notes: Optional[str] = None
    items: List[ItemPayload]

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        try:
            datetime.date.fromisoformat(value[:10])
            datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("date must be in YYYY-MM-DD format")
        return value


class ExercisePayload(BaseModel):
    name: str = Field(min_length=1)
    category: Category
    muscleGroup: Optional[str] = None
    equipment: Optional[str] = None
    youtubeUrl: Optional[Url] = None
    hasLoad: bool = False
    hasReps: bool = False
    hasDuration: bool = False
    hasIntervals: bool = False


class ExerciseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[Category] = None
    muscleGroup: Optional[str] = None
    equipment: Optional[str] = None
    youtubeUrl: Optional[Url] = None
    hasLoad: Optional[bool] = None
    hasReps: Optional[bool] = None
    hasDuration: Optional[bool] = None
    hasIntervals: Optional[bool] = None


class RegisterPayload(BaseModel):
    email: Email
    name: str = Field(min_length=1)
    password: str = Field(min_length=6)


class LoginPayload(BaseModel):
    email: Email
    password: str = Field(min_length=6)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=6)


class AdminUserUpdate(BaseModel):
    email: Optional[Email] = None
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None
    password: Optional[str] = Field(default=None, min_length=6)


class TemplatePayload(BaseModel):
    name: str = Field(min_length=1)
    notes: Optional[str] = None
    # stored as an opaque blob; checked only when turned into a workout
    items: List[Any]


class TemplateUpdate(BaseModel):
    name: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[Any]] = None


class TemplateDuplicate(BaseModel):
    name: Optional[str] = None


class TemplateInstantiate(BaseModel):
    date: str
    title: Optional[str] = None
    notes: Optional[str] = None

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from uuid import UUID
from typing import Optional, List, Literal

from core.config import settings

Difficulty = Literal["beginner", "intermediate", "advanced"]
TemplateCategory = Literal["push", "pull", "legs", "core", "full_body"]


class CamelModel(BaseModel):
    """Wire format is camelCase; Python attributes stay snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------------------------------------------------------------------
# AI Coach
# ---------------------------------------------------------------------------

class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class CoachChatRequest(CamelModel):
    message: str
    history: List[ChatMessage] = Field(default_factory=list)

    @field_validator("message")
    @classmethod
    def message_within_limits(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message is required and cannot be empty")
        limit = settings.COACH_MAX_MESSAGE_LENGTH
        if len(v) > limit:
            raise ValueError(f"Message too long (max {limit} characters)")
        return v


class CoachChatResponse(CamelModel):
    reply: str
    suggested_follow_ups: List[str]


class SuggestionsResponse(CamelModel):
    suggestions: List[str]


class TemplateGenerationRequest(CamelModel):
    goal: str = Field(min_length=1)
    level: Difficulty = "intermediate"
    focus_areas: Optional[List[str]] = None
    name: Optional[str] = None

    @field_validator("goal")
    @classmethod
    def goal_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Goal is required")
        return v


class GenerateTemplateResponse(CamelModel):
    template_id: int
    template_name: str


class GeneratedTemplateExercise(CamelModel):
    # Strict: model output "3" or true is a structure error, not a number
    exercise_slug: StrictStr
    sets: StrictInt = Field(ge=1, le=10)
    reps: StrictInt = Field(ge=1, le=100)
    rest_seconds: StrictInt = Field(ge=0, le=300)
    notes: Optional[StrictStr] = None


class GeneratedTemplate(CamelModel):
    """Shape the template generator demands from the model."""
    name: StrictStr
    description: StrictStr
    category: TemplateCategory
    difficulty: Difficulty
    exercises: List[GeneratedTemplateExercise] = Field(min_length=1, max_length=12)


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------

class WorkoutSet(CamelModel):
    reps: int = Field(default=0, ge=0)
    weight: Optional[float] = Field(default=0, ge=0)
    rpe: float = Field(default=0, ge=0, le=10)
    completed: bool = False


class ExerciseCreate(CamelModel):
    name: str = Field(min_length=1)
    order: Optional[int] = None
    sets: List[WorkoutSet] = Field(default_factory=list)


class ExerciseResponse(CamelModel):
    id: int
    name: str
    order: int
    sets: List[WorkoutSet]


class WorkoutCreate(CamelModel):
    name: str = Field(min_length=1)
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    total_volume: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    exercises: List[ExerciseCreate] = Field(default_factory=list)


class WorkoutUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, ge=0)
    total_volume: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    exercises: Optional[List[ExerciseCreate]] = None


class WorkoutResponse(CamelModel):
    id: int
    user_id: UUID
    name: str
    date: datetime
    duration: Optional[int] = None
    total_volume: Optional[float] = None
    notes: Optional[str] = None
    exercises: List[ExerciseResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------

class JournalEntryCreate(CamelModel):
    content: str = Field(min_length=1)
    mood: int = Field(ge=1, le=10)
    energy_level: int = Field(ge=1, le=10)
    photo_url: Optional[str] = None
    date: Optional[datetime] = None


class JournalEntryResponse(CamelModel):
    id: int
    content: str
    mood: int
    energy_level: int
    photo_url: Optional[str] = None
    date: datetime


# ---------------------------------------------------------------------------
# Library and templates
# ---------------------------------------------------------------------------

class ExerciseLibraryResponse(CamelModel):
    id: int
    slug: str
    name: str
    category: str
    difficulty: str


class TemplateExerciseResponse(CamelModel):
    id: int
    exercise_id: int
    exercise_slug: Optional[str] = None
    exercise_name: Optional[str] = None
    order_index: int
    default_sets: int
    default_reps: int
    default_rest_seconds: int
    notes: Optional[str] = None


class TemplateResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    is_public: bool
    exercises: List[TemplateExerciseResponse] = Field(default_factory=list)

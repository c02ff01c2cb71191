from sqlalchemy import Column, Integer, Boolean, CheckConstraint, Float, DateTime, ForeignKey, JSON, Text, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from core.database import Base
import uuid

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONType = JSON().with_variant(JSONB(), "postgresql")

TEMPLATE_CATEGORIES = ("push", "pull", "legs", "core", "full_body")
DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")


class User(Base):
    """Profile row owned by the identity service; read-only here."""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    display_name = Column(Text, nullable=True)
    current_level = Column(Text, nullable=True)  # free text, e.g. 'Beginner', 'Level 3'
    streak = Column(Integer, default=0, nullable=False)  # consecutive training days

    workouts = relationship("Workout", back_populates="user")


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    duration = Column(Integer, nullable=True)  # seconds, from the logging timer
    total_volume = Column(Float, nullable=True)  # sum(reps * weight) over completed sets
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        order_by="Exercise.order",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_workouts_user_date", "user_id", "date"),
    )


class Exercise(Base):
    """One exercise performed within a workout."""
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    # [{"reps": 10, "weight": 0, "rpe": 7, "completed": false}, ...]
    sets = Column(JSONType, nullable=False, default=list)
    order = Column("order", Integer, nullable=False, default=0)

    workout = relationship("Workout", back_populates="exercises")


class ExerciseLibrary(Base):
    """Reference catalogue of exercises; seeded externally."""
    __tablename__ = "exercise_library"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(Text, unique=True, nullable=False)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    difficulty = Column(Text, nullable=False)


class WorkoutTemplate(Base):
    __tablename__ = "workout_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    difficulty = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    exercises = relationship(
        "WorkoutTemplateExercise",
        back_populates="template",
        order_by="WorkoutTemplateExercise.order_index",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(
            "category IS NULL OR category IN (" + ", ".join(f"'{c}'" for c in TEMPLATE_CATEGORIES) + ")",
            name="ck_workout_templates_category",
        ),
        CheckConstraint(
            "difficulty IS NULL OR difficulty IN (" + ", ".join(f"'{d}'" for d in DIFFICULTY_LEVELS) + ")",
            name="ck_workout_templates_difficulty",
        ),
    )


class WorkoutTemplateExercise(Base):
    __tablename__ = "workout_template_exercises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(Integer, ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercise_library.id"), nullable=False)
    order_index = Column(Integer, nullable=False)
    default_sets = Column(Integer, nullable=False)
    default_reps = Column(Integer, nullable=False)
    default_rest_seconds = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)

    template = relationship("WorkoutTemplate", back_populates="exercises")
    exercise = relationship("ExerciseLibrary")


class PersonalRecord(Base):
    __tablename__ = "personal_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    exercise_name = Column(Text, nullable=False)
    value = Column(Float, nullable=False)
    achieved_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    mood = Column(Integer, nullable=False)  # 1-10
    energy_level = Column(Integer, nullable=False)  # 1-10
    photo_url = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("mood BETWEEN 1 AND 10", name="ck_journal_entries_mood"),
        CheckConstraint("energy_level BETWEEN 1 AND 10", name="ck_journal_entries_energy_level"),
    )

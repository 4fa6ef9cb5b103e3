"""Exercise schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import ExerciseCategory


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ExerciseCategory
    muscle_group: str = Field(default="", max_length=100)
    equipment: str | None = Field(default=None, max_length=100)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: ExerciseCategory | None = None
    muscle_group: str | None = Field(None, max_length=100)
    equipment: str | None = Field(None, max_length=100)


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    is_default: bool
    user_id: UUID | None = None


class CategoryRead(BaseModel):
    name: str
    exercises: list[ExerciseRead] = []

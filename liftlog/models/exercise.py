"""Exercise model - default (shared, read-only) or custom (owned by one user)."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.db.base import Base


class Exercise(Base):
    """Exercise definition. Defaults have ``user_id`` NULL and ``is_default`` set."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # ExerciseCategory value
    muscle_group: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    equipment: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    logs: Mapped[list["WorkoutLog"]] = relationship("WorkoutLog", back_populates="exercise")

    def is_visible_to(self, user_id: uuid.UUID) -> bool:
        return self.is_default or self.user_id == user_id

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return not self.is_default and self.user_id == user_id

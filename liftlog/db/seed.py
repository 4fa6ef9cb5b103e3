"""Default exercise catalogue shared by every user."""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from liftlog.models.exercise import Exercise

# (slug, name, category, muscle_group, equipment)
DEFAULT_EXERCISES: list[tuple[str, str, str, str, str]] = [
    # Chest
    ("bench-press", "Bench Press", "chest", "Pectorals", "Barbell"),
    ("incline-bench", "Incline Bench Press", "chest", "Upper chest", "Barbell"),
    ("dumbbell-press", "Dumbbell Bench Press", "chest", "Pectorals", "Dumbbell"),
    ("chest-fly", "Chest Fly", "chest", "Pectorals", "Dumbbell"),
    ("push-up", "Push-up", "chest", "Pectorals", "Bodyweight"),
    # Back
    ("deadlift", "Deadlift", "back", "Erector spinae", "Barbell"),
    ("barbell-row", "Barbell Row", "back", "Lats", "Barbell"),
    ("pull-up", "Pull-up", "back", "Lats", "Bodyweight"),
    ("lat-pulldown", "Lat Pulldown", "back", "Lats", "Cable"),
    ("seated-row", "Seated Cable Row", "back", "Rhomboids", "Cable"),
    # Legs
    ("squat", "Squat", "legs", "Quadriceps", "Barbell"),
    ("leg-press", "Leg Press", "legs", "Quadriceps", "Machine"),
    ("romanian-deadlift", "Romanian Deadlift", "legs", "Hamstrings", "Barbell"),
    ("leg-curl", "Leg Curl", "legs", "Hamstrings", "Machine"),
    ("leg-extension", "Leg Extension", "legs", "Quadriceps", "Machine"),
    ("calf-raise", "Calf Raise", "legs", "Calves", "Machine"),
    ("lunges", "Lunges", "legs", "Quadriceps", "Dumbbell"),
    # Shoulders
    ("overhead-press", "Overhead Press", "shoulders", "Deltoids", "Barbell"),
    ("lateral-raise", "Lateral Raise", "shoulders", "Side delts", "Dumbbell"),
    ("front-raise", "Front Raise", "shoulders", "Front delts", "Dumbbell"),
    ("rear-delt-fly", "Rear Delt Fly", "shoulders", "Rear delts", "Dumbbell"),
    ("face-pull", "Face Pull", "shoulders", "Rear delts", "Cable"),
    # Arms
    ("barbell-curl", "Barbell Curl", "arms", "Biceps", "Barbell"),
    ("dumbbell-curl", "Dumbbell Curl", "arms", "Biceps", "Dumbbell"),
    ("hammer-curl", "Hammer Curl", "arms", "Brachialis", "Dumbbell"),
    ("tricep-pushdown", "Triceps Pushdown", "arms", "Triceps", "Cable"),
    ("skull-crusher", "Skull Crusher", "arms", "Triceps", "Barbell"),
    ("tricep-dip", "Dip", "arms", "Triceps", "Bodyweight"),
    # Core
    ("plank", "Plank", "core", "Rectus abdominis", "Bodyweight"),
    ("crunch", "Crunch", "core", "Rectus abdominis", "Bodyweight"),
    ("leg-raise", "Leg Raise", "core", "Lower abs", "Bodyweight"),
    ("russian-twist", "Russian Twist", "core", "Obliques", "Bodyweight"),
    ("cable-crunch", "Cable Crunch", "core", "Rectus abdominis", "Cable"),
]


def default_exercise_id(slug: str) -> uuid.UUID:
    """Stable id so re-seeding never duplicates a default."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"liftlog:exercise:{slug}")


def default_exercise_rows() -> list[dict]:
    return [
        {
            "id": default_exercise_id(slug),
            "name": name,
            "category": category,
            "muscle_group": muscle_group,
            "equipment": equipment,
            "is_default": True,
            "user_id": None,
        }
        for slug, name, category, muscle_group, equipment in DEFAULT_EXERCISES
    ]


def seed_default_exercises(db: Session) -> int:
    """Insert missing defaults; returns how many were added."""
    existing = set(db.execute(select(Exercise.id).where(Exercise.is_default.is_(True))).scalars().all())
    added = 0
    for row in default_exercise_rows():
        if row["id"] not in existing:
            db.add(Exercise(**row))
            added += 1
    return added

"""Application constants."""

SESSION_COOKIE_NAME = "session"

# Credentials
MIN_PASSWORD_LENGTH = 6
MAX_USERNAME_LENGTH = 64

# Set logging
MIN_RPE = 1
MAX_RPE = 10
MAX_REPS = 1000

# Workout list
WORKOUTS_PAGE_SIZE = 20

# Stats
EXERCISE_HISTORY_LIMIT = 50
DASHBOARD_RECENT_PRS = 5

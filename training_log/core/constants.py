"""Application constants."""

from training_log.core.enums import MuscleGroup

# Analytics window when the caller passes no `days`
DEFAULT_ANALYTICS_DAYS = 90

# Registration
MIN_PASSWORD_LENGTH = 8
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# Canonical validation messages (one per rule)
MSG_MENU_NAME_REQUIRED = "Menu name is required"
MSG_SCHEDULED_DAYS_REQUIRED = "Select at least one scheduled day"
MSG_SETS_REQUIRED = "At least one set is required"
MSG_WEIGHT_POSITIVE = "Weight must be greater than 0"
MSG_REPS_POSITIVE = "Reps must be greater than 0"
MSG_MENU_NOT_FOUND = "Menu not found"
MSG_RECORD_NOT_FOUND = "Record not found"
MSG_USER_NOT_FOUND = "User not found"
MSG_REGISTER_FIELDS_REQUIRED = "Email, name and password are required"
MSG_LOGIN_FIELDS_REQUIRED = "Email and password are required"
MSG_PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
MSG_INVALID_EMAIL = "Enter a valid email address"
MSG_EMAIL_TAKEN = "This email address is already registered"
MSG_INVALID_CREDENTIALS = "Incorrect email or password"
MSG_NOT_AUTHENTICATED = "Not authenticated"
MSG_INVALID_TOKEN = "Invalid or expired token"
MSG_INTERNAL_ERROR = "Internal Server Error"

# Muscle group inference: first matching rule wins, checked in this order.
# Keywords are matched as lowercase substrings of the menu name.
MUSCLE_GROUP_KEYWORDS: tuple[tuple[MuscleGroup, tuple[str, ...]], ...] = (
    (MuscleGroup.CHEST, ("bench", "push", "chest", "ベンチ", "プッシュ", "胸")),
    (MuscleGroup.LEGS, ("squat", "leg", "スクワット", "脚", "レッグ")),
    (MuscleGroup.BACK, ("deadlift", "back", "row", "デッド", "背中", "ロー")),
    (MuscleGroup.SHOULDERS, ("shoulder", "press", "ショルダー", "肩", "プレス")),
    (MuscleGroup.ARMS, ("curl", "arm", "カール", "腕", "上腕")),
    (MuscleGroup.ABS, ("abs", "core", "crunch", "腹筋", "コア", "クランチ")),
)

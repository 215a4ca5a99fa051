"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_WEEKLY_HOURS = 44.0
MEAL_BREAK_THRESHOLD_HOURS = 5.5
MEAL_BREAK_HOURS = 0.5

DEFAULT_MEAL_BREAK_MINUTES = 30
MIN_MEAL_BREAK_MINUTES = 0
MAX_MEAL_BREAK_MINUTES = 120

MIN_PASSWORD_LENGTH = 6

DEFAULT_HISTORY_DAYS = 30
DEFAULT_LIST_LIMIT = 50

DEFAULT_SYSTEM_ADMIN_EMAIL = "admin@sistema.com"

WEEKDAY_NAMES = ("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado")

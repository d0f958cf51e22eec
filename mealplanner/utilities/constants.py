from typing import Final

WEEKDAYS: Final[list[str]] = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]

# Inclusive relative-effort range per weekday. Friday is never picked.
EFFORT_RANGES: Final[dict[str, tuple[int, int]]] = {
    "Monday": (0, 2),
    "Tuesday": (3, 5),
    "Wednesday": (3, 5),
    "Thursday": (3, 5),
    "Saturday": (3, 5),
    "Sunday": (6, 100),
}

EATING_OUT_DAY: Final[str] = "Friday"
EATING_OUT_NAME: Final[str] = "Eating out"

RECENCY_DAYS: Final[int] = 21
RECONSTRUCT_LIMIT: Final[int] = 7
RECONSTRUCT_MIN_DAYS: Final[int] = 6

RED_MEAT_KEYWORDS: Final[list[str]] = ["beef", "steak", "burger", "pork", "ham"]

SEED_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S.%f"
ICS_DATE_FORMAT: Final[str] = "%Y%m%d"
ICS_STAMP_FORMAT: Final[str] = "%Y%m%dT%H%M%SZ"
ICS_PRODID: Final[str] = "-//Meal Planner//EN"
ICS_UID_DOMAIN: Final[str] = "mealplanner"

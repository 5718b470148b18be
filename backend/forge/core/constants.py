"""Shared application constants.

Centralizes the thresholds and vocabularies used by the compliance and
load logic so we can document and adjust them in one place.
"""

# Weekly schedule order; a plan week has exactly one entry per label
DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

SESSION_TYPES = [
    "easy",
    "tempo",
    "long",
    "intervals",
    "recovery",
    "rest",
    "strength",
    "cross_train",
]

# Planned session types matched against the lift log instead of runs
LIFT_SESSION_TYPES = {"strength", "cross_train"}

# A logged session satisfies a planned day up to this many days either side
MATCH_TOLERANCE_DAYS = 1

# Perceived effort (1-10) at or above which a run counts as hard
HARD_EFFORT = 7

# Week-over-week mileage increase thresholds (percent), most severe first
DANGER_INCREASE_PCT = 30
HIGH_INCREASE_PCT = 20
ELEVATED_INCREASE_PCT = 10

LOAD_RECOMMENDATIONS = {
    "danger": (
        "Take a recovery day now. Your load jumped sharply or you've stacked "
        "too many hard days in a row."
    ),
    "high": "Reduce the distance and intensity of your next two sessions.",
    "elevated": "Load is creeping up. Keep your easy days truly easy this week.",
    "optimal": "",
}

RESCHEDULED_MARKER = " (rescheduled)"
RESCHEDULED_REST_DESCRIPTION = "Rescheduled recovery day"

# Heavy leg lifts within this window make hard running risky
HEAVY_LEGS_WINDOW_HOURS = 48
HEAVY_LEGS_WARNING = (
    "You logged a heavy leg day recently. Running tempo or intervals today "
    "risks injury. Your muscles haven't fully recovered. Consider an easy "
    "recovery run instead, or rest."
)

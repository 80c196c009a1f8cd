"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

# Break is only deducted from days longer than this (half-day work has no lunch).
FULL_DAY_THRESHOLD_MINUTES = 240

PERIOD_FORMAT = "%Y-%m"

DEFAULT_TIMEZONE = "Asia/Jakarta"

# Config table keys -> default raw values (same string form as stored in DB).
CONFIG_DEFAULTS: dict[str, str] = {
    "officeLat": "-2.9795731113284303",
    "officeLng": "104.73111003716011",
    "geofenceRadius": "100",
    "work_start_time": "08:00",
    "work_end_time": "16:00",
    "late_tolerance_minutes": "10",
    "break_duration_minutes": "60",
    "overtime_rate_first_hour": "1.5",
    "overtime_rate_next_hours": "2.0",
    "late_penalty_per_minute": "2000",
    "bpjs_kesehatan_rate": "0.01",
    "bpjs_ketenagakerjaan_rate": "0.02",
    "pph21_rate": "0.05",
    "timezone": DEFAULT_TIMEZONE,
}

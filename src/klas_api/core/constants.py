"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Jakarta"

QR_TOKEN_TYPE = "qr-attendance"
DEFAULT_QR_TOKEN_TTL_SECONDS = 60

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_SIGNED_URL_TTL = 3600
DEFAULT_ATTACHMENT_SIGNED_URL_TTL = 86400

DEFAULT_AVATAR_MAX_SIZE = 2_097_152
DEFAULT_ATTACHMENT_MAX_SIZE = 5_242_880

UPLOAD_CACHE_CONTROL = "3600"

ADMIN_ALLOWED_TABLES = (
    "duty_schedule",
    "students",
    "attendances",
    "class",
    "admin",
)

MIME_EXTENSION_MAP = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "application/pdf": "pdf",
}

# English weekday name (as produced by strftime("%A").lower()) -> Indonesian.
DAY_NAMES = {
    "sunday": "Minggu",
    "monday": "Senin",
    "tuesday": "Selasa",
    "wednesday": "Rabu",
    "thursday": "Kamis",
    "friday": "Jumat",
    "saturday": "Sabtu",
}

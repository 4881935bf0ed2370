"""
Fixed constants for FileGate Service.

These values are part of the public contract of the gateway (object key
layout, page sizes, token lifetimes) and are not environment-configurable.
"""

# ============================================================================
# OBJECT KEY LAYOUT
# ============================================================================

# Root prefix for every object written by the gateway
FILES_ROOT_PREFIX = "archivos/"

# ============================================================================
# OBJECT STORE LIMITS
# ============================================================================

# Maximum entries returned by a single list call (no pagination)
LIST_FILES_MAX_COUNT = 100

# Lifetime of download authorization tokens embedded in signed URLs
DOWNLOAD_URL_TTL_SECONDS = 3600

# Content type that lets B2 infer the MIME type from the file name
B2_AUTO_CONTENT_TYPE = "b2/x-auto"

# ============================================================================
# REMINDERS
# ============================================================================

DEFAULT_REMINDER_LOOKAHEAD_MINUTES = 5
DEFAULT_REMINDER_POLL_INTERVAL_SECONDS = 60
EVENT_TIME_FORMAT = "%H:%M"

# ============================================================================
# HTTP
# ============================================================================

DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGIN = "http://localhost:8080"

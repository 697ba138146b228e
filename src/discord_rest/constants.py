"""Protocol constants for the Discord REST API."""

from __future__ import annotations

REST_API_VERSION = 10

BASE_HOST = "https://discord.com"
BASE_URL = f"/api/v{REST_API_VERSION}"

OK_STATUS_CODES = frozenset({200, 201, 204, 304})
DO_NOT_RETRY_STATUS_CODES = frozenset({401, 403, 404, 405, 411, 413, 429})
RATE_LIMITED_STATUS = 429
BAD_GATEWAY_STATUS = 502

DEFAULT_RETRY_LIMIT = 3

# Per-route defaults until the server reports real values
DEFAULT_BUCKET_LIMIT = 5
DEFAULT_BUCKET_RESET_MS = 5000
# Account-wide cap: 50 requests per second
GLOBAL_REQUESTS_PER_SECOND = 50
GLOBAL_RESET_MS = 1000
# Floor for bogus (negative) reset durations caused by clock skew
MIN_RESET_MS = 100
# Wait used when a 429 carries no retry information at all
FALLBACK_RETRY_AFTER_MS = 1000

GET_CHANNEL_MESSAGES_MIN_RESULTS = 1
GET_CHANNEL_MESSAGES_MAX_RESULTS = 100
BULK_DELETE_MESSAGES_MIN = 2
BULK_DELETE_MESSAGES_MAX = 100

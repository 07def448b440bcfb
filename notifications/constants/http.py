"""HTTP header names and request thresholds."""

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Requests slower than this (seconds) are logged as warnings.
SLOW_REQUEST_THRESHOLD = 1.0

USER_SCOPE = "notification:user"
ADMIN_SCOPE = "notification:admin"

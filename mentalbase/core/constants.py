"""Application constants."""

# Session cookie and CSRF header
COOKIE_NAME = "mb_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"

# Field limits shared by schemas
TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000
TERMINATION_REASON_MAX_LENGTH = 500

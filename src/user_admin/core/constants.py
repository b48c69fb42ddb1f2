"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_UPLOAD_BYTES = 2 * 1024 * 1024
DEFAULT_FORM_STORE_SESSIONS = 500

USER_FORM = "userForm"
SEARCH_USER_FORM = "searchUserForm"

IMAGE_DATA_URI_PREFIX = "data:image/png;base64,"

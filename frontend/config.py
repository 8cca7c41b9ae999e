import os

APP_TITLE = "📚 StudyAid"

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000/api/v1")

# Owner id forwarded to the API; set by whatever signs the user in.
USER_ID = os.getenv("STUDYAID_USER_ID", "")
USER_HEADER = os.getenv("STUDYAID_USER_HEADER", "X-User-Id")

# No client-side timeout: a hung request waits until the transport fails.
REQUEST_TIMEOUT = None

# core/constants.py

# --- Activity Event Types (Standard Registry) ---

# Session lifecycle
EVENT_TYPE_LOGIN = "login"
EVENT_TYPE_IMPERSONATED = "impersonated"
EVENT_TYPE_LOGOUT = "logout"
EVENT_TYPE_LOGOUT_ALL = "logout_all"

# Answers
EVENT_TYPE_SUBMIT_ANSWER = "submit_answer"

# Internal usage (analytics only, never stored as an ActivityEvent)
EVENT_TYPE_GRANT_POINT = "grant_point"

EVENT_TYPE_CHOICES = [
    (EVENT_TYPE_LOGIN, "Login"),
    (EVENT_TYPE_IMPERSONATED, "Impersonated"),
    (EVENT_TYPE_LOGOUT, "Logout"),
    (EVENT_TYPE_LOGOUT_ALL, "Logout (all devices)"),
    (EVENT_TYPE_SUBMIT_ANSWER, "Submit answer"),
]

# Payload keys
PAYLOAD_SUBMISSION_ID = "submission_id"
PAYLOAD_QUESTION_ID = "question_id"
PAYLOAD_STATUS = "status"
PAYLOAD_MACHINE = "machine"
PAYLOAD_IMPERSONATOR_ID = "impersonator_id"

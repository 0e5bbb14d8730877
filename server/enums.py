import enum
# =========================================================
# ENUMS
# =========================================================
class BookStatus(str, enum.Enum):
    unread = "unread"
    reading = "reading"
    completed = "completed"
    insulted = "insulted"

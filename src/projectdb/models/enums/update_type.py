import enum


class UpdateType(enum.Enum):
    progress = "PROGRESS"
    issue = "ISSUE"
    report = "REPORT"

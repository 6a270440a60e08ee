import enum


class ProjectStatus(enum.Enum):
    in_progress = "IN_PROGRESS"
    done = "DONE"
    cancelled = "CANCELLED"


class TaskStatus(enum.Enum):
    in_progress = "IN_PROGRESS"
    done = "DONE"
    cancelled = "CANCELLED"

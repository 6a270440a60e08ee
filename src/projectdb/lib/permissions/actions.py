from enum import Enum


class Action(Enum):
    CREATE = "create"
    READ_ALL = "read_all"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# Actions checked against the parent of the entity they concern rather than the entity itself.
PARENT_ACTIONS = (Action.CREATE, Action.READ_ALL)

# Actions whose denial is reported as a failure to view, rather than to manage, a resource.
VIEW_ACTIONS = (Action.READ_ALL, Action.READ)

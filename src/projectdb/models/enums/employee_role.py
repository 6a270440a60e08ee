import enum


class EmployeeRole(enum.Enum):
    admin = "ADMIN"
    manager = "MANAGER"
    staff = "STAFF"

class ArtifactAssignmentError(ValueError):
    """Raised when an update may not be linked to an artifact."""

    pass


class CrossTaskAssignmentError(ArtifactAssignmentError):
    """Raised when an update is assigned to an artifact belonging to a different task"""

    pass


class UpdateAlreadyAssignedError(ArtifactAssignmentError):
    """Raised when an update is assigned to an artifact while it is already the proof of another artifact"""

    pass


class EmployeeInUseError(ValueError):
    """Raised when an employee who still manages projects or owns work is removed"""

    pass

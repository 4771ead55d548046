class ProjectNotFoundError(LookupError):
    """Raised when an animation project id is not present in the store."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Animation project not found: {project_id}")
        self.project_id = project_id


class SessionNotFoundError(LookupError):
    """Raised when no editing session is open for a project."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"No editing session open for project: {project_id}")
        self.project_id = project_id


class UnauthenticatedError(PermissionError):
    """Raised when an operation needs a user id and none was given."""

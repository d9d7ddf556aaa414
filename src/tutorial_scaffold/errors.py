from typing import Optional


class ScaffoldError(Exception):
    """A tutorial could not be created."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

"""Template processing exceptions."""


class TemplateError(Exception):
    """Base exception for template errors."""

    pass


class TemplateNotFoundError(TemplateError):
    """Raised when the input template doesn't exist."""

    pass


class TemplateIOError(TemplateError):
    """Raised when the input can't be read or the output can't be written."""

    pass


class UnresolvedPlaceholdersError(TemplateError):
    """Raised after a render that left one or more placeholders unresolved.

    The output file has already been written in full when this is raised.
    """

    def __init__(self, count: int, result=None):
        self.count = count
        self.result = result
        super().__init__(
            f"{count} items could not be substituted. Check the log for details."
        )

"""Exception types for the highlight harvester."""


class HighlightsError(Exception):
    """Base exception for harvester operations."""

    pass


class LuaSyntaxError(HighlightsError):
    """A file could not be read as a Lua table literal."""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} at offset {position}"
        super().__init__(message)
        self.position = position


class StoreWriteError(HighlightsError):
    """The quote store could not be written."""

    pass

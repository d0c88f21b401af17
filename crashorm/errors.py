"""Error type raised by the ORM."""

from __future__ import annotations


class OrmError(Exception):
    """Error raised by the ORM.

    It either carries a plain message or wraps an error raised by the
    database driver; in both cases ``str()`` shows the underlying text.
    """

    def __init__(self, error: str | BaseException) -> None:
        self.error = error
        super().__init__(str(error))
        if isinstance(error, BaseException):
            self.__cause__ = error

    @property
    def is_database_error(self) -> bool:
        """True when this error wraps an error from the database driver."""
        return isinstance(self.error, BaseException)

    def __str__(self) -> str:
        return str(self.error)
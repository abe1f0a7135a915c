"""
Exceptions raised by the loader.

Fatal problems abort the load with one of these. Detection-quality issues
(unknown MIME type, no separator found) are only logged and collected in
``Table.warnings``.
"""


class SpreadsheetReadError(Exception):
    """Base class for every error raised while loading a table."""


class InvalidInputError(SpreadsheetReadError, ValueError):
    """Source is undefined or the options are malformed."""


class BadOptionCountError(InvalidInputError):
    """Positional options were not given as complete key/value pairs."""


class SourceNotFoundError(SpreadsheetReadError, FileNotFoundError):
    """Path source does not exist or is not a regular file."""


class UnknownFormatError(SpreadsheetReadError):
    """No parser could be resolved for the source."""


class SourceIOError(SpreadsheetReadError, OSError):
    """Opening, reading or closing the source failed."""


class WriteError(SpreadsheetReadError):
    """The intermediate CSV could not be written, or could not be parsed."""


class BackendError(SpreadsheetReadError):
    """The spreadsheet backend failed on the original source."""

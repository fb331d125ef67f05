"""
Defines custom exception types for Media Tools.

These exceptions let every stage report exactly what went wrong. Operations
catch `ConfigurationException` themselves (a user-correctable input error ends
the operation cleanly), while parse, filesystem and engine errors propagate and
end the whole run.

All custom exceptions inherit from the base `MediaToolsException`.
"""


class MediaToolsException(Exception):
    """Base class for all custom exceptions in Media Tools."""

    pass


# --- Configuration Exceptions ---
class ConfigurationException(MediaToolsException):
    """
    Base class for invalid operation parameters.

    These are detected before any file is processed, so raising one never
    leaves partial output behind.
    """

    pass


class UnsupportedCodecException(ConfigurationException):
    """Raised when the requested audio codec is not one the transcoder knows."""

    pass


class IncompatibleContainerException(ConfigurationException):
    """Raised when an audio codec cannot be placed in the requested container."""

    pass


class MismatchedInputsException(ConfigurationException):
    """
    Raised when the base and content directories of a merge hold a different
    number of files, so no index-aligned pairing exists.
    """

    pass


class InvalidSourceException(ConfigurationException):
    """Raised when a source path or stream selection cannot be used."""

    pass


# --- Parse Exceptions ---
class TimestampParseException(MediaToolsException):
    """
    Raised for a timestamp line that does not match
    `<disc> <track> <title> <start time>`.

    Attributes:
        line (str): The offending input line, verbatim.
    """

    def __init__(self, line: str, reason: str = ""):
        self.line = line
        message = f"Invalid timestamp '{line}'!"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# --- Filesystem Exceptions ---
class FilesystemException(MediaToolsException):
    """Base class for filesystem failures that end the run."""

    pass


class DirectoryReadException(FilesystemException):
    """Raised when a directory that must be traversed cannot be listed."""

    pass


class RenameException(FilesystemException):
    """Raised when a file or directory cannot be renamed, e.g. on a name collision."""

    pass


class TimestampFileException(FilesystemException):
    """Raised when the timestamp file exists but cannot be decoded as UTF-8 text."""

    pass


# --- Engine Exceptions ---
class EngineException(MediaToolsException):
    """Base class for errors raised while running ffmpeg."""

    pass


class EngineNotFoundException(EngineException):
    """Raised when the ffmpeg executable cannot be started."""

    pass


class EngineFailureException(EngineException):
    """
    Raised when ffmpeg output was classified as a failure.

    This aborts the remaining files of the current operation. Files produced by
    earlier invocations are left in place.
    """

    pass

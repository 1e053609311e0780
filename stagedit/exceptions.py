"""Exception classes for the edit pipeline boundary."""


class StagEditError(Exception):
    """Base exception for stagedit errors."""

    pass


class DecodeError(StagEditError):
    """Raised when a source image is missing, damaged or unsupported."""

    pass


class EncodeError(StagEditError):
    """Raised when a result can not be encoded or written to its target."""

    pass

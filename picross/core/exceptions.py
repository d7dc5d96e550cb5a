"""Custom exception hierarchy for the picross solver."""


class PicrossError(Exception):
    """Base exception for solver failures."""


class HintFormatError(PicrossError):
    """Raised when a hint table contains values that are not run lengths."""


class PuzzleLoadError(PicrossError):
    """Raised when a puzzle file cannot be read or parsed."""


class ValidationError(PicrossError):
    """Raised when hint tables fail the integrity checks."""

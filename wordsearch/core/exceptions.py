"""Custom exception hierarchy for word search generation."""


class WordSearchError(Exception):
    """Base exception for generator failures."""


class ConfigurationError(WordSearchError):
    """Raised when puzzle inputs cannot produce any grid (empty alphabet, bad sizes)."""


class PlacementError(WordSearchError):
    """Raised when a word cannot be written along the requested line."""


class FillError(WordSearchError):
    """Raised when no alphabet letter can fill a cell without forming a banned word."""


class ValidationError(WordSearchError):
    """Raised when the finished grid fails the integrity checks."""


class OutputError(WordSearchError):
    """Raised when a finished puzzle cannot be written to its destination."""

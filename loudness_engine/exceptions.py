"""
Custom exception classes for the loudness engine.
"""


class LoudnessEngineError(Exception):
    """Base exception for all loudness engine errors."""
    pass


class InvalidInputError(LoudnessEngineError, ValueError):
    """Raised when a frequency, level or phon argument is outside its domain."""
    pass


class DataIntegrityError(LoudnessEngineError):
    """Raised when a contour table violates its invariants at load time."""
    pass


class AudioSessionError(LoudnessEngineError):
    """Raised when a tone session is used outside its lifecycle."""
    pass


__all__ = ['LoudnessEngineError', 'InvalidInputError', 'DataIntegrityError', 'AudioSessionError']

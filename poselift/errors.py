"""
Exception types raised by PoseLift.

DecodeError is recoverable per frame (the pipeline drops that frame's
keypoints). ConfigurationError is fatal at construction time.
"""


class PoseLiftError(Exception):
    """Base class for PoseLift errors."""


class DecodeError(PoseLiftError, ValueError):
    """A heatmap tensor could not be decoded into keypoints."""


class ConfigurationError(PoseLiftError, ValueError):
    """Invalid static configuration (window size, layout, labels)."""

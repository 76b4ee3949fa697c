"""
Exception types for EEG Biomarkers

Parsing-level problems (short rows, non-numeric cells) are absorbed where
they occur. Only structurally impossible requests surface as these errors.
"""


class EEGBiomarkerError(Exception):
    """Base class for all package errors"""


class EEGFormatError(EEGBiomarkerError, ValueError):
    """Input file is empty, truncated, or otherwise unreadable"""


class UnsupportedFormatError(EEGFormatError):
    """File extension is not one of the supported recording formats"""


class ConfigurationError(EEGBiomarkerError, ValueError):
    """Configuration values are invalid"""

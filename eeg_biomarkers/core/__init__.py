"""
Core data types and configuration for EEG Biomarkers

This module contains the fundamental data classes, configuration and
exception types used throughout the pipeline.
"""

from .data_types import (Channel, Recording, RecordingHeader, BandPower, ChannelStatistics,
                         ChannelSpectralProfile, ConnectivityProfile, RiskFactors,
                         BiomarkerSummary, ScreeningResult, AggregateMetrics)
from .config import AnalysisConfig, Montage, load_config, validate_config
from .exceptions import (EEGBiomarkerError, EEGFormatError, UnsupportedFormatError,
                         ConfigurationError)

__all__ = [
    'Channel', 'Recording', 'RecordingHeader', 'BandPower', 'ChannelStatistics',
    'ChannelSpectralProfile', 'ConnectivityProfile', 'RiskFactors',
    'BiomarkerSummary', 'ScreeningResult', 'AggregateMetrics',
    'AnalysisConfig', 'Montage', 'load_config', 'validate_config',
    'EEGBiomarkerError', 'EEGFormatError', 'UnsupportedFormatError', 'ConfigurationError',
]

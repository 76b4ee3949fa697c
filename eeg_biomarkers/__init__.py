"""
EEG Biomarkers - Spectral and connectivity biomarker extraction

A modular Python package that turns multi-channel EEG recordings into band
powers, slow-wave ratios, complexity, spike rate and inter-channel
connectivity, and aggregates them into a bounded risk score.

Python: 3.10+
"""

__version__ = "1.0.0"

# Main package imports for easy access
from .core.data_types import Channel, Recording, ChannelSpectralProfile, AggregateMetrics
from .core.config import AnalysisConfig, Montage, load_config
from .core.exceptions import EEGBiomarkerError, EEGFormatError, UnsupportedFormatError
from .acquisition.sources import load_recording, SyntheticRecordingSource
from .processing.spectral import SpectralAnalyzer
from .processing.connectivity import compute_connectivity
from .scoring.risk import RiskScorer
from .pipeline import analyze_recording

__all__ = [
    'Channel', 'Recording', 'ChannelSpectralProfile', 'AggregateMetrics',
    'AnalysisConfig', 'Montage', 'load_config',
    'EEGBiomarkerError', 'EEGFormatError', 'UnsupportedFormatError',
    'load_recording', 'SyntheticRecordingSource',
    'SpectralAnalyzer', 'compute_connectivity',
    'RiskScorer', 'analyze_recording',
]

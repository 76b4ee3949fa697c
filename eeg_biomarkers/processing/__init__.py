"""
EEG signal processing components

This module contains the basic statistics, FFT, spectral and connectivity
engines used by the analysis pipeline.
"""

from .fft import fft, ifft
from .statistics import compute_channel_statistics, detect_anomalies, extract_basic_features
from .spectral import SpectralAnalyzer, compute_welch_psd, approximate_entropy, spike_rate
from .connectivity import compute_connectivity, pearson_correlation

__all__ = ['fft', 'ifft',
           'compute_channel_statistics', 'detect_anomalies', 'extract_basic_features',
           'SpectralAnalyzer', 'compute_welch_psd', 'approximate_entropy', 'spike_rate',
           'compute_connectivity', 'pearson_correlation']

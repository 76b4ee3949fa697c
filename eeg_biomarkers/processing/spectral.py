"""
Per-channel spectral analysis

This module estimates the power spectral density with Welch's method on
top of the package's own FFT, decomposes it into the canonical EEG bands,
and computes the complexity (approximate entropy) and spike-rate features.
Every function here operates on a single channel.
"""

import logging
from typing import Dict, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy import signal as sp_signal

from ..core.config import SpectralConfig, APEN_M, APEN_R, SPIKE_SIGMA, WELCH_MAX_WINDOW, WELCH_OVERLAP
from ..core.data_types import BandPower, Channel, ChannelSpectralProfile
from .fft import fft


def compute_welch_psd(samples: np.ndarray, fs: float, max_window: int = WELCH_MAX_WINDOW,
                      overlap: float = WELCH_OVERLAP) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute power spectral density using Welch's method

    Segments of length ``min(max_window, n)`` are Hann-windowed, transformed,
    and their squared magnitudes accumulated per frequency bin, then averaged
    over the number of full segments. Only the one-sided bins ``0..L//2``
    are kept.

    Args:
        samples: Single-channel data (samples,)
        fs: Sampling frequency in Hz
        max_window: Upper bound on the segment length
        overlap: Fraction of each segment shared with the next

    Returns:
        Tuple[frequencies, power]: Both empty for an empty signal
    """
    samples = np.asarray(samples, dtype=np.float64)
    n = samples.shape[0]
    if n == 0:
        return np.zeros(0), np.zeros(0)

    nperseg = min(max_window, n)
    step = max(1, int(nperseg * (1.0 - overlap)))
    window = sp_signal.get_window("hann", nperseg, fftbins=False)

    n_bins = nperseg // 2 + 1
    accumulated = np.zeros(n_bins)
    n_segments = 0
    for pos in range(0, n - nperseg + 1, step):
        spectrum = fft(samples[pos:pos + nperseg] * window)
        accumulated += np.abs(spectrum[:n_bins]) ** 2
        n_segments += 1

    freqs = np.arange(n_bins) * (fs / nperseg)
    return freqs, accumulated / n_segments


def band_power(freqs: np.ndarray, psd: np.ndarray, freq_range: Tuple[float, float]) -> float:
    """
    Average PSD value over bins inside ``[low, high]`` inclusive

    Returns:
        float: 0.0 when no bin falls inside the band
    """
    freq_mask = (freqs >= freq_range[0]) & (freqs <= freq_range[1])
    if not np.any(freq_mask):
        return 0.0
    return float(np.mean(psd[freq_mask]))


def relative_band_powers(absolute: Dict[str, float]) -> Dict[str, BandPower]:
    """Attach relative percentages; all zero when the total power is zero"""
    total = sum(absolute.values())
    return {
        name: BandPower(absolute_power=power,
                        relative_power_percent=(power / total * 100.0) if total > 0 else 0.0)
        for name, power in absolute.items()
    }


def delta_theta_ratio(delta: float, theta: float) -> float:
    """Slow-wave ratio, 0 unless both powers are strictly positive"""
    if delta > 0 and theta > 0:
        return delta / theta
    return 0.0


def _count_template_matches(samples: np.ndarray, length: int, tolerance: float) -> int:
    # Unordered pairs (i < j) whose templates agree pointwise within tolerance
    templates = sliding_window_view(samples, length)
    count = 0
    for i in range(templates.shape[0] - 1):
        distance = np.max(np.abs(templates[i + 1:] - templates[i]), axis=1)
        count += int(np.count_nonzero(distance <= tolerance))
    return count


def approximate_entropy(samples: np.ndarray, m: int = APEN_M, r: float = APEN_R) -> float:
    """
    Approximate entropy ApEn(m, r * std)

    Counts template matches of length m and m + 1 over all index pairs and
    returns ``ln((C_m * (n - m)) / (C_m+1 * (n - m - 1)))``.

    Args:
        samples: Single-channel data (samples,)
        m: Template length
        r: Tolerance as a fraction of the population standard deviation

    Returns:
        float: 0.0 for constant or too-short signals, or when either match
        count is zero
    """
    samples = np.asarray(samples, dtype=np.float64)
    n = samples.shape[0]
    if n <= m + 1:
        return 0.0

    std = float(np.std(samples))
    if std == 0.0:
        return 0.0
    tolerance = r * std

    matches_m = _count_template_matches(samples, m, tolerance)
    matches_m1 = _count_template_matches(samples, m + 1, tolerance)
    if matches_m == 0 or matches_m1 == 0:
        return 0.0

    return float(np.log((matches_m * (n - m)) / (matches_m1 * (n - m - 1))))


def count_spikes(samples: np.ndarray, n_sigma: float = SPIKE_SIGMA) -> int:
    """
    Count excursions above ``mean + n_sigma * std``

    Each excursion counts once at its onset, however many samples it spans.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.shape[0] == 0:
        return 0
    threshold = np.mean(samples) + n_sigma * np.std(samples)
    above = samples > threshold
    onsets = int(above[0]) + int(np.count_nonzero(above[1:] & ~above[:-1]))
    return onsets


def spike_rate(samples: np.ndarray, fs: float, n_sigma: float = SPIKE_SIGMA) -> float:
    """Spike onsets per second of recording"""
    n = np.asarray(samples).shape[0]
    if n == 0:
        return 0.0
    return count_spikes(samples, n_sigma) / (n / fs)


class SpectralAnalyzer:
    """
    Extract the spectral profile of a single channel

    Holds the spectral configuration so it can be shipped once to parallel
    workers; each call reads the sampling rate from the channel itself.
    """

    def __init__(self, config: SpectralConfig = None):
        self.config = config if config is not None else SpectralConfig()

    def compute_welch_psd(self, channel: Channel) -> Tuple[np.ndarray, np.ndarray]:
        return compute_welch_psd(channel.samples, channel.sampling_rate_hz,
                                 self.config.max_window, self.config.overlap)

    def extract_band_powers(self, channel: Channel) -> Dict[str, BandPower]:
        """
        Absolute and relative power for every configured band

        Args:
            channel: Channel to analyze

        Returns:
            Dict[str, BandPower]: Keyed by band name in configured order
        """
        freqs, psd = self.compute_welch_psd(channel)
        absolute = {name: band_power(freqs, psd, freq_range)
                    for name, freq_range in self.config.bands.items()}
        return relative_band_powers(absolute)

    def analyze_channel(self, channel: Channel) -> ChannelSpectralProfile:
        """
        Build the full spectral profile for one channel

        Args:
            channel: Channel to analyze

        Returns:
            ChannelSpectralProfile: Band powers plus derived features
        """
        bands = self.extract_band_powers(channel)
        delta = bands["delta"].absolute_power if "delta" in bands else 0.0
        theta = bands["theta"].absolute_power if "theta" in bands else 0.0
        alpha = bands["alpha"].absolute_power if "alpha" in bands else 0.0

        profile = ChannelSpectralProfile(
            channel_name=channel.name,
            bands=bands,
            delta_theta_ratio=delta_theta_ratio(delta, theta),
            alpha_absolute_power=alpha,
            complexity=approximate_entropy(channel.samples, self.config.apen_m, self.config.apen_r),
            spike_rate_hz=spike_rate(channel.samples, channel.sampling_rate_hz,
                                     self.config.spike_sigma),
        )
        logging.debug(f"Channel {channel.name}: DT={profile.delta_theta_ratio:.3f} "
                      f"alpha={profile.alpha_absolute_power:.3g} ApEn={profile.complexity:.3f} "
                      f"spikes={profile.spike_rate_hz:.3f}Hz")
        return profile

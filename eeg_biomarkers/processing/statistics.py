"""
Basic per-channel feature extraction

Descriptive statistics (mean, variance, peak-to-peak, zero crossings) and
the fixed-threshold amplitude anomaly flag.
"""

import logging
from typing import Dict, List

import numpy as np

from ..core.config import AnomalyThresholds
from ..core.data_types import Channel, ChannelStatistics, Recording


def count_zero_crossings(samples: np.ndarray) -> int:
    """
    Count sign transitions between consecutive samples

    A transition is a pair where one sample is >= 0 and the other < 0.
    The result is a raw count, not a rate.
    """
    if samples.shape[0] < 2:
        return 0
    non_negative = samples >= 0
    return int(np.count_nonzero(non_negative[1:] != non_negative[:-1]))


def is_anomalous(stats: ChannelStatistics, thresholds: AnomalyThresholds) -> bool:
    """Amplitude anomaly rule: large spread, large swing, or large DC offset"""
    return bool(stats.std_dev > thresholds.std_dev
                or stats.peak_to_peak > thresholds.peak_to_peak
                or abs(stats.mean) > thresholds.abs_mean)


def compute_channel_statistics(channel: Channel,
                               thresholds: AnomalyThresholds = None) -> ChannelStatistics:
    """
    Compute descriptive statistics for one channel

    Args:
        channel: Channel to summarize
        thresholds: Anomaly thresholds (defaults if None)

    Returns:
        ChannelStatistics: All-zero statistics for channels with fewer than
        two samples
    """
    if thresholds is None:
        thresholds = AnomalyThresholds()

    samples = channel.samples
    if samples.shape[0] < 2:
        logging.debug(f"Channel {channel.name} has {samples.shape[0]} samples, statistics zeroed")
        return ChannelStatistics(channel_name=channel.name)

    mean = float(np.mean(samples))
    variance = float(np.mean((samples - mean) ** 2))
    stats = ChannelStatistics(
        channel_name=channel.name,
        mean=mean,
        variance=variance,
        std_dev=float(np.sqrt(variance)),
        peak_to_peak=float(np.max(samples) - np.min(samples)),
        zero_crossings=count_zero_crossings(samples),
    )
    stats.is_anomalous = is_anomalous(stats, thresholds)
    return stats


def detect_anomalies(recording: Recording, thresholds: AnomalyThresholds = None) -> List[str]:
    """
    Names of channels that trip the amplitude anomaly rule

    Args:
        recording: Recording to scan
        thresholds: Anomaly thresholds (defaults if None)

    Returns:
        List[str]: Anomalous channel names in recording order
    """
    anomalous = [
        stats.channel_name
        for stats in (compute_channel_statistics(ch, thresholds) for ch in recording.channels)
        if stats.is_anomalous
    ]
    if anomalous:
        logging.info(f"Anomalous channels: {anomalous}")
    return anomalous


def extract_basic_features(recording: Recording) -> Dict[str, float]:
    """Flatten per-channel statistics into a ``<channel>_<feature>`` dict"""
    features = {}
    for channel in recording.channels:
        stats = compute_channel_statistics(channel)
        features[f"{channel.name}_mean"] = stats.mean
        features[f"{channel.name}_std"] = stats.std_dev
        features[f"{channel.name}_peakToPeak"] = stats.peak_to_peak
        features[f"{channel.name}_zeroCrossings"] = stats.zero_crossings
        features[f"{channel.name}_variance"] = stats.variance
    return features

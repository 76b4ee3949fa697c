"""
Cross-channel connectivity

Pairwise Pearson correlation, the coherence/synchronization indices derived
from it, and region-aggregated power over the montage's frontal and
temporal electrode sets. Needs the whole recording, so it runs after all
per-channel analysis has finished.
"""

import logging
from typing import List

import numpy as np

from ..core.config import Montage, REMOTE_COHERENCE_OFFSET
from ..core.data_types import Channel, ConnectivityProfile, Recording


def pearson_correlation(x: np.ndarray, y: np.ndarray) -> float:
    """
    Pearson correlation over the common prefix of two signals

    Returns:
        float: 0.0 when either signal has no variance or fewer than two samples
    """
    n = min(x.shape[0], y.shape[0])
    if n < 2:
        return 0.0
    x_diff = x[:n] - np.mean(x[:n])
    y_diff = y[:n] - np.mean(y[:n])
    denominator = np.sqrt(np.sum(x_diff ** 2) * np.sum(y_diff ** 2))
    if denominator <= 0:
        return 0.0
    return float(np.sum(x_diff * y_diff) / denominator)


def correlation_matrix(channels: List[Channel]) -> np.ndarray:
    """Symmetric (n_channels x n_channels) matrix of pairwise correlations"""
    n = len(channels)
    matrix = np.zeros((n, n))
    for i in range(n):
        matrix[i, i] = pearson_correlation(channels[i].samples, channels[i].samples)
        for j in range(i + 1, n):
            matrix[i, j] = matrix[j, i] = pearson_correlation(channels[i].samples,
                                                              channels[j].samples)
    return matrix


def region_power(channels: List[Channel], electrodes: List[str]) -> float:
    """
    Summed channel variance over an electrode set, divided by the set size

    Electrodes missing from the recording contribute nothing, but the
    divisor stays the full set size.
    """
    if not electrodes:
        return 0.0
    names = set(electrodes)
    total = 0.0
    for channel in channels:
        if channel.name in names and channel.samples.shape[0] > 0:
            total += float(np.var(channel.samples))
    return total / len(electrodes)


def compute_connectivity(recording: Recording, montage: Montage = None,
                         remote_offset: float = REMOTE_COHERENCE_OFFSET) -> ConnectivityProfile:
    """
    Compute coherence, synchronization and region power for a recording

    Args:
        recording: Full recording (all channels materialized)
        montage: Electrode groups for region power (10-20 if None)
        remote_offset: Constant subtracted from local coherence to model
            weaker long-range coupling

    Returns:
        ConnectivityProfile: Coherence terms are 0 with fewer than two channels
    """
    if montage is None:
        montage = Montage()

    channels = recording.channels
    matrix = correlation_matrix(channels)

    local_coherence = 0.0
    n = len(channels)
    if n > 1:
        upper = np.triu_indices(n, k=1)
        local_coherence = float(np.mean(np.abs(matrix[upper])))
    else:
        logging.debug("Fewer than two channels, coherence defaults to 0")

    profile = ConnectivityProfile(
        local_coherence=local_coherence,
        remote_coherence=max(0.0, local_coherence - remote_offset),
        synchronization_index=local_coherence,
        frontal_power=region_power(channels, montage.frontal),
        temporal_power=region_power(channels, montage.temporal),
        correlation_matrix=matrix,
    )
    logging.info(f"Connectivity: coherence={profile.local_coherence:.3f} "
                 f"frontal={profile.frontal_power:.3g} temporal={profile.temporal_power:.3g}")
    return profile

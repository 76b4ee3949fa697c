import numpy as np
import pytest

from eeg_biomarkers.core.config import Montage
from eeg_biomarkers.core.data_types import Channel, Recording
from eeg_biomarkers.processing.connectivity import (compute_connectivity, correlation_matrix,
                                                    pearson_correlation, region_power)

from .signals import FS, sine


def make_recording(named_samples):
    return Recording(channels=[Channel(name, samples, FS) for name, samples in named_samples],
                     sampling_rate_hz=FS)


def test_antiphase_channels_fully_coherent(antiphase_recording):
    profile = compute_connectivity(antiphase_recording)
    assert profile.local_coherence == pytest.approx(1.0, abs=1e-6)
    assert profile.synchronization_index == profile.local_coherence
    assert profile.remote_coherence == pytest.approx(0.8, abs=1e-6)
    assert profile.correlation_matrix[0, 1] == pytest.approx(-1.0, abs=1e-6)


def test_single_channel_defaults_to_zero():
    profile = compute_connectivity(make_recording([("Fz", sine(10.0))]))
    assert profile.local_coherence == 0.0
    assert profile.remote_coherence == 0.0
    assert profile.synchronization_index == 0.0


def test_remote_coherence_floors_at_zero():
    rng = np.random.default_rng(5)
    recording = make_recording([("a", rng.normal(size=2000)), ("b", rng.normal(size=2000))])
    profile = compute_connectivity(recording)
    assert profile.local_coherence < 0.2
    assert profile.remote_coherence == 0.0


def test_local_coherence_is_mean_absolute_pairwise_correlation():
    rng = np.random.default_rng(11)
    signals = [rng.normal(size=300) for _ in range(4)]
    recording = make_recording([(f"c{i}", s) for i, s in enumerate(signals)])
    expected = np.mean([abs(np.corrcoef(signals[i], signals[j])[0, 1])
                        for i in range(4) for j in range(i + 1, 4)])
    assert compute_connectivity(recording).local_coherence == pytest.approx(expected)


def test_pearson_edge_cases():
    assert pearson_correlation(np.ones(10), np.arange(10.0)) == 0.0
    assert pearson_correlation(np.array([1.0]), np.array([2.0])) == 0.0
    # Unequal lengths compare the common prefix
    assert pearson_correlation(np.arange(5.0), np.arange(10.0)) == pytest.approx(1.0)


def test_correlation_matrix_symmetric():
    rng = np.random.default_rng(2)
    channels = [Channel(f"c{i}", rng.normal(size=100), FS) for i in range(3)]
    matrix = correlation_matrix(channels)
    np.testing.assert_allclose(matrix, matrix.T)
    np.testing.assert_allclose(np.diag(matrix), 1.0)


def test_region_power_normalizer_does_not_shrink():
    samples = np.tile([-3.0, 3.0], 50)
    recording = make_recording([("Fz", samples), ("Cz", samples)])
    profile = compute_connectivity(recording)
    assert profile.frontal_power == pytest.approx(9.0 / 7)
    assert profile.temporal_power == 0.0


def test_injected_montage():
    samples = np.tile([-2.0, 2.0], 50)
    recording = make_recording([("T3", samples), ("T4", samples)])
    montage = Montage(name="legacy", frontal=["F3"], temporal=["T3", "T4"])
    profile = compute_connectivity(recording, montage)
    assert profile.temporal_power == pytest.approx(4.0)
    assert region_power(recording.channels, []) == 0.0

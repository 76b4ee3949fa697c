import numpy as np
import pytest

from eeg_biomarkers.core.config import AnomalyThresholds
from eeg_biomarkers.core.data_types import Channel, Recording
from eeg_biomarkers.processing.statistics import (compute_channel_statistics, count_zero_crossings,
                                                  detect_anomalies, extract_basic_features)


def test_known_statistics():
    stats = compute_channel_statistics(Channel("Fz", [1.0, -1.0, 2.0, -2.0], 256))
    assert stats.mean == pytest.approx(0.0)
    assert stats.variance == pytest.approx(2.5)
    assert stats.std_dev == pytest.approx(np.sqrt(2.5))
    assert stats.peak_to_peak == pytest.approx(4.0)
    assert stats.zero_crossings == 3
    assert not stats.is_anomalous


def test_zero_counts_as_non_negative():
    assert count_zero_crossings(np.array([0.0, -1.0, 0.0])) == 2
    assert count_zero_crossings(np.array([0.0, 0.0, 3.0])) == 0


def test_zero_crossings_is_raw_count_not_rate():
    samples = np.tile([1.0, -1.0], 500)
    assert count_zero_crossings(samples) == 999


@pytest.mark.parametrize("samples", [[], [42.0]])
def test_degenerate_channels_give_zeros(samples):
    stats = compute_channel_statistics(Channel("Cz", samples, 256))
    assert (stats.mean, stats.variance, stats.std_dev, stats.peak_to_peak) == (0, 0, 0, 0)
    assert stats.zero_crossings == 0
    assert not stats.is_anomalous


def test_anomaly_rules():
    offset = compute_channel_statistics(Channel("a", np.full(10, 60.0) + np.arange(10) * 0.01, 256))
    assert offset.is_anomalous

    swing = np.zeros(100)
    swing[50] = 310.0
    assert compute_channel_statistics(Channel("b", swing, 256)).is_anomalous

    spread = np.tile([-120.0, 120.0], 50)
    assert compute_channel_statistics(Channel("c", spread, 256)).is_anomalous

    quiet = np.tile([-20.0, 20.0], 50)
    assert not compute_channel_statistics(Channel("d", quiet, 256)).is_anomalous


def test_custom_thresholds():
    quiet = np.tile([-20.0, 20.0], 50)
    strict = AnomalyThresholds(std_dev=10.0)
    assert compute_channel_statistics(Channel("d", quiet, 256), strict).is_anomalous


def test_detect_anomalies_and_feature_dict():
    recording = Recording(channels=[Channel("Fz", np.tile([-200.0, 200.0], 10), 256),
                                    Channel("Cz", np.tile([-5.0, 5.0], 10), 256)],
                          sampling_rate_hz=256)
    assert detect_anomalies(recording) == ["Fz"]

    features = extract_basic_features(recording)
    assert set(features) == {f"{ch}_{name}" for ch in ("Fz", "Cz")
                             for name in ("mean", "std", "peakToPeak", "zeroCrossings", "variance")}
    assert features["Cz_peakToPeak"] == pytest.approx(10.0)
    assert features["Fz_zeroCrossings"] == 19


@pytest.mark.parametrize("rate", [0, -256.0])
def test_recording_rejects_non_positive_rate(rate):
    with pytest.raises(ValueError, match="Sampling rate must be positive"):
        Recording(channels=[], sampling_rate_hz=rate)

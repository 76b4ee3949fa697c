import json

import numpy as np
import pytest

from eeg_biomarkers.acquisition.sources import SyntheticRecordingSource
from eeg_biomarkers.communication.serializers import metrics_to_dict
from eeg_biomarkers.core.config import AnalysisConfig, SpectralConfig
from eeg_biomarkers.core.data_types import Channel, Recording
from eeg_biomarkers.core.exceptions import ConfigurationError
from eeg_biomarkers.pipeline import analyze_recording

from .signals import FS


def test_antiphase_sine_scenario(antiphase_recording, sequential_config):
    metrics = analyze_recording(antiphase_recording, sequential_config)

    assert metrics.connectivity.local_coherence == pytest.approx(1.0, abs=1e-6)
    assert [p.channel_name for p in metrics.channel_profiles] == ["A", "B"]
    for profile in metrics.channel_profiles:
        relative = {name: b.relative_power_percent for name, b in profile.bands.items()}
        assert max(relative, key=relative.get) == "alpha"
        assert relative["alpha"] > 90.0
        assert profile.delta_theta_ratio < 0.5
        assert profile.spike_rate_hz == 0.0


def test_all_zero_channel(zero_recording, sequential_config):
    metrics = analyze_recording(zero_recording, sequential_config)
    profile = metrics.channel_profiles[0]
    assert all(b.absolute_power == 0.0 for b in profile.bands.values())
    assert profile.delta_theta_ratio == 0.0
    assert profile.complexity == 0.0
    assert profile.spike_rate_hz == 0.0
    # No alpha and no coupling: reduced alpha (20) plus connectivity (15)
    assert metrics.risk_score == 35.0
    assert metrics.risk_level == "Moderate"
    assert metrics.anomalous_channels == []


def test_frequent_spikes_saturate_anomaly_factor(sequential_config):
    rng = np.random.default_rng(9)
    channels = []
    for i in range(3):
        x = rng.uniform(-1.0, 1.0, 1024)
        x[::40] += 5.0  # isolated spikes, ~6 per second
        channels.append(Channel(f"c{i}", x, FS))
    metrics = analyze_recording(Recording(channels=channels, sampling_rate_hz=FS), sequential_config)
    assert all(p.spike_rate_hz > 5.0 for p in metrics.channel_profiles)
    assert metrics.risk_factors.anomalies == 25.0
    assert 0.0 <= metrics.risk_score <= 100.0


def test_relative_powers_sum_to_100_per_channel(sequential_config):
    recording = SyntheticRecordingSource(seed=4).generate_recording(2.0)
    metrics = analyze_recording(recording, sequential_config)
    for profile in metrics.channel_profiles:
        total = sum(b.absolute_power for b in profile.bands.values())
        relative = sum(b.relative_power_percent for b in profile.bands.values())
        assert total > 0
        assert relative == pytest.approx(100.0)
    assert 0.0 <= metrics.risk_score <= 100.0
    assert len(metrics.biomarker_summaries) == 4
    assert len(metrics.channel_statistics) == len(recording.channels)


def test_parallel_matches_sequential():
    recording = SyntheticRecordingSource(channel_names=["Fz", "Cz", "O1"], seed=5).generate_recording(2.0)
    sequential = analyze_recording(recording, AnalysisConfig(n_jobs=1))
    parallel = analyze_recording(recording, AnalysisConfig(n_jobs=2))
    assert [p.channel_name for p in parallel.channel_profiles] == ["Fz", "Cz", "O1"]
    for a, b in zip(sequential.channel_profiles, parallel.channel_profiles):
        assert a.complexity == pytest.approx(b.complexity)
        assert a.alpha_absolute_power == pytest.approx(b.alpha_absolute_power)
    assert sequential.risk_score == pytest.approx(parallel.risk_score)


def test_deterministic(antiphase_recording, sequential_config):
    first = metrics_to_dict(analyze_recording(antiphase_recording, sequential_config))
    second = metrics_to_dict(analyze_recording(antiphase_recording, sequential_config))
    assert first == second


def test_empty_recording(sequential_config):
    metrics = analyze_recording(Recording(channels=[], sampling_rate_hz=FS), sequential_config)
    assert metrics.channel_profiles == []
    assert 0.0 <= metrics.risk_score <= 100.0


def test_invalid_config_rejected(antiphase_recording):
    with pytest.raises(ConfigurationError):
        analyze_recording(antiphase_recording, AnalysisConfig(spectral=SpectralConfig(max_window=0)))


def test_serialized_metrics_are_json(antiphase_recording, sequential_config):
    payload = metrics_to_dict(analyze_recording(antiphase_recording, sequential_config))
    decoded = json.loads(json.dumps(payload))
    assert set(decoded) == {"spectralAnalyses", "connectivity", "riskFactors", "riskScore",
                            "riskLevel", "biomarkers", "anomalousChannels"}
    assert decoded["spectralAnalyses"][0]["channel"] == "A"
    assert set(decoded["spectralAnalyses"][0]["bands"]) == {"delta", "theta", "alpha", "beta", "gamma"}
    assert decoded["biomarkers"][0]["normal"] == [0.5, 1.2]

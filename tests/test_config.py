import json

import pytest

from eeg_biomarkers.core.config import (FRONTAL_CHANNELS, AnalysisConfig, SpectralConfig,
                                        load_config, validate_config)
from eeg_biomarkers.core.exceptions import ConfigurationError


def write_json(tmp_path, payload):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_defaults():
    config = AnalysisConfig()
    assert config.montage.frontal == FRONTAL_CHANNELS
    assert config.montage.temporal == ["T7", "T8", "P7", "P8"]
    assert config.spectral.max_window == 512
    assert config.remote_coherence_offset == 0.2
    assert config.anomaly.std_dev == 100.0
    validate_config(config)


def test_configs_do_not_share_state():
    a, b = AnalysisConfig(), AnalysisConfig()
    a.montage.frontal.append("AF3")
    assert "AF3" not in b.montage.frontal
    assert "AF3" not in FRONTAL_CHANNELS


def test_load_config_without_path_returns_defaults():
    assert load_config(None) == AnalysisConfig()


def test_partial_overlay(tmp_path):
    path = write_json(tmp_path, {
        "montage": {"name": "high-density", "temporal": ["T9", "T10"]},
        "spectral": {"bands": {"alpha": [8, 13]}},
        "risk": {"alpha_anchor": 5.0},
        "n_jobs": 2,
    })
    config = load_config(path)
    assert config.montage.name == "high-density"
    assert config.montage.temporal == ["T9", "T10"]
    assert config.montage.frontal == FRONTAL_CHANNELS
    assert config.spectral.bands == {"alpha": (8, 13)}
    assert config.risk.alpha_anchor == 5.0
    assert config.risk.delta_theta_anchor == 1.2
    assert config.n_jobs == 2


def test_unknown_key_rejected(tmp_path):
    with pytest.raises(ConfigurationError, match="spectral.window"):
        load_config(write_json(tmp_path, {"spectral": {"window": 256}}))


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "nope.json"))


@pytest.mark.parametrize("config", [
    AnalysisConfig(sampling_rate=0),
    AnalysisConfig(spectral=SpectralConfig(max_window=0)),
    AnalysisConfig(spectral=SpectralConfig(overlap=1.0)),
    AnalysisConfig(spectral=SpectralConfig(bands={"alpha": (12.0, 8.0)})),
    AnalysisConfig(n_jobs=0),
])
def test_validation_failures(config):
    with pytest.raises(ConfigurationError):
        validate_config(config)


def test_numeric_strings_are_coerced(tmp_path):
    config = load_config(write_json(tmp_path, {"spectral": {"max_window": "256"}, "sampling_rate": 128}))
    assert config.spectral.max_window == 256
    assert isinstance(config.spectral.max_window, int)
    assert config.sampling_rate == 128.0
    assert isinstance(config.sampling_rate, float)


@pytest.mark.parametrize("payload", [
    {"montage": None},
    {"montage": ["Fz"]},
    {"spectral": {"max_window": "wide"}},
    {"spectral": {"max_window": None}},
    {"spectral": {"bands": {"alpha": [8]}}},
    {"spectral": {"bands": [[8, 12]]}},
    {"montage": {"frontal": "Fz"}},
    {"risk": {"risk_levels": [[30, 5]]}},
    {"risk": {"screen_variance_steps": [[1000, "lots"]]}},
    {"n_jobs": 1.5},
    {"n_jobs": True},
])
def test_wrong_types_raise_configuration_error(tmp_path, payload):
    with pytest.raises(ConfigurationError):
        load_config(write_json(tmp_path, payload))


def test_scalp_positions_and_screen_steps_overlay(tmp_path):
    config = load_config(write_json(tmp_path, {
        "montage": {"positions": {"Cz": [0.5, 0.5]}},
        "risk": {"screen_variance_steps": [[10, 5]], "screen_full_confidence": 8},
    }))
    assert config.montage.positions == {"Cz": (0.5, 0.5)}
    assert config.risk.screen_variance_steps == [(10.0, 5.0)]
    assert config.risk.screen_full_confidence == 8


def test_default_positions_cover_montage():
    montage = AnalysisConfig().montage
    for name in montage.frontal + montage.temporal:
        x, y = montage.positions[name]
        assert 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0

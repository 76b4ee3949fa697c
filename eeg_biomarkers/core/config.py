"""
Configuration for EEG Biomarkers

Module-level constants hold the default calibration. The dataclasses below
bundle them into injectable configuration so alternate montages or
recalibrated thresholds can be supplied without code changes.

The anomaly thresholds, risk anchors and remote coherence offset are
provisional calibration values with no normalization for recording length,
amplitude units or demographics.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ConfigurationError

# ============================================================================
# SIGNAL DEFAULTS
# ============================================================================

DEFAULT_SAMPLING_RATE = 256.0     # Used when a text recording carries no rate (Hz)

# Frequency Bands (Hz), inclusive on both edges
FREQ_BANDS = {
    "delta": (0.5, 4.0),
    "theta": (4.0, 8.0),
    "alpha": (8.0, 12.0),
    "beta": (12.0, 30.0),
    "gamma": (30.0, 50.0),
}

# Spectral estimation
WELCH_MAX_WINDOW = 512            # Upper bound on Welch segment length (samples)
WELCH_OVERLAP = 0.5               # Segment overlap fraction
APEN_M = 2                        # Approximate entropy template length
APEN_R = 0.2                      # Approximate entropy tolerance (fraction of std)
SPIKE_SIGMA = 3.0                 # Spike threshold in standard deviations above mean

# ============================================================================
# MONTAGE - 10-20 system electrode groups
# ============================================================================

FRONTAL_CHANNELS = ["Fp1", "Fp2", "F7", "F3", "Fz", "F4", "F8"]
TEMPORAL_CHANNELS = ["T7", "T8", "P7", "P8"]

# Normalized scalp coordinates (x left to right, y front to back)
SCALP_POSITIONS = {
    "Fp1": (0.35, 0.1), "Fp2": (0.65, 0.1),
    "F7": (0.1, 0.25), "F3": (0.35, 0.25), "Fz": (0.5, 0.25), "F4": (0.65, 0.25), "F8": (0.9, 0.25),
    "T7": (0.05, 0.5), "C3": (0.35, 0.5), "Cz": (0.5, 0.5), "C4": (0.65, 0.5), "T8": (0.95, 0.5),
    "P7": (0.1, 0.75), "P3": (0.35, 0.75), "Pz": (0.5, 0.75), "P4": (0.65, 0.75), "P8": (0.9, 0.75),
    "O1": (0.4, 0.95), "Oz": (0.5, 0.95), "O2": (0.6, 0.95),
}

# ============================================================================
# CALIBRATION
# ============================================================================

# Basic anomaly flag
ANOMALY_STD_THRESH = 100.0
ANOMALY_PTP_THRESH = 300.0
ANOMALY_MEAN_THRESH = 50.0

# Connectivity
REMOTE_COHERENCE_OFFSET = 0.2     # Modeled drop in long-range coupling, not measured

# Risk sub-score anchors: (anchor, span, cap)
RISK_DELTA_THETA = (1.2, 0.5, 25.0)
RISK_REDUCED_ALPHA = (4.0, 2.0, 20.0)
RISK_COMPLEXITY = (1.5, 15.0)     # (saturation point, cap)
RISK_CONNECTIVITY = (0.4, 15.0)   # (anchor, cap)
RISK_ANOMALIES = (0.5, 25.0)      # (spike rate at cap, cap)

# Biomarker normal ranges
BIOMARKER_RANGES = {
    "Delta/Theta Ratio": (0.5, 1.2),
    "Average Alpha Power": (4.0, 8.0),
    "Brain Synchronization": (0.3, 0.6),
    "Spike Frequency (Hz)": (0.0, 0.1),
}

# Risk level cut-offs (upper bound inclusive)
RISK_LEVELS = [(30.0, "Low"), (60.0, "Moderate"), (100.0, "High")]

# Statistical screen: (threshold, points), checked from the highest threshold down
SCREEN_VARIANCE_STEPS = [(1000.0, 30.0), (500.0, 20.0), (200.0, 10.0)]
SCREEN_PEAK_TO_PEAK_STEPS = [(200.0, 30.0), (150.0, 20.0), (100.0, 10.0)]
SCREEN_ANOMALY_POINTS = 40.0      # Points when every channel is anomalous
SCREEN_FULL_CONFIDENCE = 64       # Channel count at which confidence reaches 100


@dataclass
class Montage:
    """Electrode name sets used for region-aggregated power, plus scalp coordinates"""
    name: str = "10-20"
    frontal: List[str] = field(default_factory=lambda: list(FRONTAL_CHANNELS))
    temporal: List[str] = field(default_factory=lambda: list(TEMPORAL_CHANNELS))
    positions: Dict[str, Tuple[float, float]] = field(default_factory=lambda: dict(SCALP_POSITIONS))


@dataclass
class AnomalyThresholds:
    """Fixed amplitude thresholds for the per-channel anomaly flag"""
    std_dev: float = ANOMALY_STD_THRESH
    peak_to_peak: float = ANOMALY_PTP_THRESH
    abs_mean: float = ANOMALY_MEAN_THRESH


@dataclass
class SpectralConfig:
    """Parameters for the per-channel spectral engine"""
    bands: Dict[str, Tuple[float, float]] = field(default_factory=lambda: dict(FREQ_BANDS))
    max_window: int = WELCH_MAX_WINDOW
    overlap: float = WELCH_OVERLAP
    apen_m: int = APEN_M
    apen_r: float = APEN_R
    spike_sigma: float = SPIKE_SIGMA


@dataclass
class RiskCalibration:
    """Linear-map anchors for the five risk sub-scores"""
    delta_theta_anchor: float = RISK_DELTA_THETA[0]
    delta_theta_span: float = RISK_DELTA_THETA[1]
    delta_theta_cap: float = RISK_DELTA_THETA[2]
    alpha_anchor: float = RISK_REDUCED_ALPHA[0]
    alpha_span: float = RISK_REDUCED_ALPHA[1]
    alpha_cap: float = RISK_REDUCED_ALPHA[2]
    complexity_saturation: float = RISK_COMPLEXITY[0]
    complexity_cap: float = RISK_COMPLEXITY[1]
    connectivity_anchor: float = RISK_CONNECTIVITY[0]
    connectivity_cap: float = RISK_CONNECTIVITY[1]
    spike_rate_at_cap: float = RISK_ANOMALIES[0]
    anomalies_cap: float = RISK_ANOMALIES[1]
    biomarker_ranges: Dict[str, Tuple[float, float]] = field(
        default_factory=lambda: dict(BIOMARKER_RANGES))
    risk_levels: List[Tuple[float, str]] = field(default_factory=lambda: list(RISK_LEVELS))
    screen_variance_steps: List[Tuple[float, float]] = field(
        default_factory=lambda: list(SCREEN_VARIANCE_STEPS))
    screen_peak_to_peak_steps: List[Tuple[float, float]] = field(
        default_factory=lambda: list(SCREEN_PEAK_TO_PEAK_STEPS))
    screen_anomaly_points: float = SCREEN_ANOMALY_POINTS
    screen_full_confidence: int = SCREEN_FULL_CONFIDENCE


@dataclass
class AnalysisConfig:
    """
    Complete configuration for one analysis run

    Groups the montage, spectral parameters, anomaly thresholds and risk
    calibration. Every field has a default matching the 10-20 montage and
    the original calibration, so ``AnalysisConfig()`` is a valid config.

    - sampling_rate: fallback rate for text recordings (Hz)
    - remote_coherence_offset: subtracted from local coherence
    - n_jobs: joblib worker count for per-channel analysis (-1 = all cores)
    """
    sampling_rate: float = DEFAULT_SAMPLING_RATE
    montage: Montage = None
    spectral: SpectralConfig = None
    anomaly: AnomalyThresholds = None
    risk: RiskCalibration = None
    remote_coherence_offset: float = REMOTE_COHERENCE_OFFSET
    n_jobs: int = -1

    def __post_init__(self):
        # Nested defaults are built here so each config owns its own copies
        if self.montage is None:
            self.montage = Montage()
        if self.spectral is None:
            self.spectral = SpectralConfig()
        if self.anomaly is None:
            self.anomaly = AnomalyThresholds()
        if self.risk is None:
            self.risk = RiskCalibration()


def validate_config(config: AnalysisConfig) -> None:
    """
    Validate configuration parameters for common mistakes

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If configuration parameters are invalid
    """
    if config.sampling_rate <= 0:
        raise ConfigurationError(f"Sampling rate must be positive, got {config.sampling_rate}")

    spectral = config.spectral
    if spectral.max_window < 1:
        raise ConfigurationError(f"Welch window must be >= 1 sample, got {spectral.max_window}")
    if not 0.0 <= spectral.overlap < 1.0:
        raise ConfigurationError(f"Welch overlap must be in [0, 1), got {spectral.overlap}")
    if spectral.apen_m < 1:
        raise ConfigurationError(f"ApEn template length must be >= 1, got {spectral.apen_m}")
    if spectral.apen_r < 0:
        raise ConfigurationError(f"ApEn tolerance must be non-negative, got {spectral.apen_r}")

    for band_name, (low, high) in spectral.bands.items():
        if low < 0 or low >= high:
            raise ConfigurationError(f"Band '{band_name}' has invalid range ({low}, {high})")

    if not config.montage.frontal and not config.montage.temporal:
        raise ConfigurationError(f"Montage '{config.montage.name}' defines no electrodes")

    risk = config.risk
    for name in ("delta_theta_span", "alpha_span", "complexity_saturation",
                 "connectivity_anchor", "spike_rate_at_cap"):
        if getattr(risk, name) <= 0:
            raise ConfigurationError(f"Risk calibration '{name}' must be positive")

    if not risk.risk_levels:
        raise ConfigurationError("Risk calibration needs at least one risk level")
    if risk.screen_full_confidence <= 0:
        raise ConfigurationError("screen_full_confidence must be positive")

    if config.n_jobs == 0:
        raise ConfigurationError("n_jobs must be non-zero")


# Fields whose JSON form is {name: [a, b]} or [[a, b], ...]
PAIR_MAPPING_KEYS = ("bands", "biomarker_ranges", "positions")
PAIR_LIST_KEYS = ("screen_variance_steps", "screen_peak_to_peak_steps")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_pair(value: Any, name: str) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(map(_is_number, value)):
        raise ConfigurationError(f"Config value '{name}' must be a pair of numbers, got {value!r}")
    return float(value[0]), float(value[1])


def _coerce(value: Any, default: Any, name: str) -> Any:
    """Convert a JSON value to the type of the field's default"""
    if isinstance(default, list):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Config value '{name}' must be a list of names, got {value!r}")
        return list(value)
    if value is None or isinstance(value, (bool, list, dict)):
        raise ConfigurationError(f"Config value '{name}' has invalid type {type(value).__name__}")

    kind = type(default)
    try:
        coerced = kind(value)
        if kind is int and coerced != float(value):
            raise ValueError("not a whole number")
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Config value '{name}' must be {kind.__name__}, got {value!r}") from e
    return coerced


def _overlay(target: Any, values: Dict[str, Any], path: str) -> None:
    """Copy JSON values onto a dataclass instance, recursing into nested configs"""
    known = {f.name for f in fields(target)}
    for key, value in values.items():
        name = f"{path}{key}"
        if key not in known:
            raise ConfigurationError(f"Unknown config key '{name}'")
        current = getattr(target, key)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ConfigurationError(f"Config section '{name}' must be a JSON object")
            _overlay(current, value, f"{name}.")
        elif key in PAIR_MAPPING_KEYS:
            if not isinstance(value, dict):
                raise ConfigurationError(f"Config value '{name}' must be a JSON object")
            setattr(target, key, {k: _number_pair(v, f"{name}.{k}") for k, v in value.items()})
        elif key in PAIR_LIST_KEYS:
            if not isinstance(value, list):
                raise ConfigurationError(f"Config value '{name}' must be a list")
            setattr(target, key, [_number_pair(v, name) for v in value])
        elif key == "risk_levels":
            if not isinstance(value, list) or not all(
                    isinstance(v, list) and len(v) == 2 and _is_number(v[0]) and isinstance(v[1], str)
                    for v in value):
                raise ConfigurationError(f"Config value '{name}' must be [[bound, label], ...]")
            setattr(target, key, [(float(bound), label) for bound, label in value])
        else:
            setattr(target, key, _coerce(value, current, name))


def load_config(path: Optional[str] = None) -> AnalysisConfig:
    """
    Load an analysis config from a JSON profile

    Keys in the file override the defaults; nested sections (``montage``,
    ``spectral``, ``anomaly``, ``risk``) may be partial.

    Args:
        path: JSON file path, or None for the defaults

    Returns:
        AnalysisConfig: Validated configuration
    """
    config = AnalysisConfig()
    if path is None:
        return config

    if not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            values = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(values, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    _overlay(config, values, "")
    validate_config(config)
    logging.info(f"Loaded config: {path} (montage {config.montage.name})")
    return config

"""
Core data types for EEG Biomarkers

This module defines the data structures that flow through the pipeline:
channels and recordings on the way in, spectral/connectivity profiles and
the aggregate metrics on the way out.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import numpy as np


@dataclass(frozen=True)
class Channel:
    """One EEG channel; samples are stored as a read-only float array"""
    name: str
    samples: np.ndarray       # Shape: (n_samples,)
    sampling_rate_hz: float

    def __post_init__(self):
        if self.sampling_rate_hz <= 0:
            raise ValueError(f"Sampling rate must be positive, got {self.sampling_rate_hz}")
        samples = np.array(self.samples, dtype=np.float64).ravel()
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return self.samples.shape[0]


@dataclass
class RecordingHeader:
    """Metadata read from a binary recording header"""
    version: str = ""
    patient_id: str = ""
    recording_id: str = ""
    record_count: int = 0
    channel_count: int = 0


@dataclass
class Recording:
    """Container for a full multi-channel recording"""
    channels: List[Channel]
    sampling_rate_hz: float
    duration_seconds: float = None
    header: Optional[RecordingHeader] = None

    def __post_init__(self):
        if self.sampling_rate_hz <= 0:
            raise ValueError(f"Sampling rate must be positive, got {self.sampling_rate_hz}")
        if self.duration_seconds is None:
            n_samples = len(self.channels[0]) if self.channels else 0
            self.duration_seconds = n_samples / self.sampling_rate_hz

    @property
    def channel_names(self) -> List[str]:
        return [ch.name for ch in self.channels]


@dataclass
class BandPower:
    """Absolute and relative power for one frequency band"""
    absolute_power: float = 0.0
    relative_power_percent: float = 0.0


@dataclass
class ChannelStatistics:
    """Descriptive statistics for one channel"""
    channel_name: str
    mean: float = 0.0
    variance: float = 0.0
    std_dev: float = 0.0
    peak_to_peak: float = 0.0
    zero_crossings: int = 0
    is_anomalous: bool = False


@dataclass
class ChannelSpectralProfile:
    """Spectral features derived from one channel"""
    channel_name: str
    bands: Dict[str, BandPower]
    delta_theta_ratio: float = 0.0
    alpha_absolute_power: float = 0.0
    complexity: float = 0.0   # Approximate entropy
    spike_rate_hz: float = 0.0


@dataclass
class ConnectivityProfile:
    """Inter-channel coupling and region-aggregated power"""
    local_coherence: float = 0.0
    remote_coherence: float = 0.0
    synchronization_index: float = 0.0
    frontal_power: float = 0.0
    temporal_power: float = 0.0
    correlation_matrix: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))


@dataclass
class RiskFactors:
    """Five independently capped risk sub-scores"""
    delta_theta: float = 0.0      # 0-25
    reduced_alpha: float = 0.0    # 0-20
    complexity: float = 0.0       # 0-15
    connectivity: float = 0.0     # 0-15
    anomalies: float = 0.0        # 0-25

    @property
    def total(self) -> float:
        score = (self.delta_theta + self.reduced_alpha + self.complexity
                 + self.connectivity + self.anomalies)
        return min(100.0, max(0.0, score))


@dataclass
class BiomarkerSummary:
    """One headline biomarker with its normal range"""
    name: str
    value: float
    normal_range: Tuple[float, float]
    is_abnormal: bool


@dataclass
class ScreeningResult:
    """Rule-based statistical screen over basic channel features"""
    score: float
    level: str
    confidence: float
    anomalous_channels: List[str]


@dataclass
class AggregateMetrics:
    """Complete output of one pipeline run"""
    channel_profiles: List[ChannelSpectralProfile]
    connectivity: ConnectivityProfile
    risk_factors: RiskFactors
    risk_score: float
    risk_level: str
    biomarker_summaries: List[BiomarkerSummary]
    channel_statistics: List[ChannelStatistics] = field(default_factory=list)
    anomalous_channels: List[str] = field(default_factory=list)

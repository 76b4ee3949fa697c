"""
Risk scoring from spectral and connectivity features

Maps the channel-averaged features onto five independently capped
sub-scores with fixed linear maps, then sums them into a 0-100 composite.
"""

from typing import Dict, List

import numpy as np

from ..core.config import RiskCalibration
from ..core.data_types import ChannelSpectralProfile, ConnectivityProfile, RiskFactors


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def average_features(profiles: List[ChannelSpectralProfile]) -> Dict[str, float]:
    """
    Mean of each risk-relevant feature across channels

    Returns:
        Dict[str, float]: Keys ``delta_theta``, ``alpha``, ``complexity``,
        ``spike_rate``; all 0 for an empty profile list
    """
    if not profiles:
        return {"delta_theta": 0.0, "alpha": 0.0, "complexity": 0.0, "spike_rate": 0.0}
    return {
        "delta_theta": float(np.mean([p.delta_theta_ratio for p in profiles])),
        "alpha": float(np.mean([p.alpha_absolute_power for p in profiles])),
        "complexity": float(np.mean([p.complexity for p in profiles])),
        "spike_rate": float(np.mean([p.spike_rate_hz for p in profiles])),
    }


class RiskScorer:
    """
    Score averaged biomarkers against calibrated clinical anchors

    Inputs must be finite; NaN is a defect upstream and is not handled here.
    """

    def __init__(self, calibration: RiskCalibration = None):
        self.calibration = calibration if calibration is not None else RiskCalibration()

    def compute_factors(self, avg_delta_theta: float, avg_alpha: float, avg_complexity: float,
                        avg_spike_rate: float, synchronization: float) -> RiskFactors:
        """
        Compute the five sub-scores from averaged features

        Args:
            avg_delta_theta: Mean delta/theta ratio
            avg_alpha: Mean absolute alpha power
            avg_complexity: Mean approximate entropy
            avg_spike_rate: Mean spike rate (Hz)
            synchronization: Connectivity synchronization index

        Returns:
            RiskFactors: Each sub-score clamped to its own cap
        """
        cal = self.calibration

        delta_theta = clamp((avg_delta_theta - cal.delta_theta_anchor) / cal.delta_theta_span
                            * cal.delta_theta_cap, 0.0, cal.delta_theta_cap)

        reduced_alpha = clamp((cal.alpha_anchor - avg_alpha) / cal.alpha_span * cal.alpha_cap,
                              0.0, cal.alpha_cap)

        if avg_complexity > cal.complexity_saturation:
            complexity = cal.complexity_cap
        else:
            complexity = avg_complexity / cal.complexity_saturation * cal.complexity_cap
        complexity = clamp(complexity, 0.0, cal.complexity_cap)

        connectivity = clamp((cal.connectivity_anchor - synchronization) / cal.connectivity_anchor
                             * cal.connectivity_cap, 0.0, cal.connectivity_cap)

        anomalies = clamp(avg_spike_rate / cal.spike_rate_at_cap * cal.anomalies_cap,
                          0.0, cal.anomalies_cap)

        return RiskFactors(delta_theta=delta_theta, reduced_alpha=reduced_alpha,
                           complexity=complexity, connectivity=connectivity, anomalies=anomalies)

    def score_profiles(self, profiles: List[ChannelSpectralProfile],
                       connectivity: ConnectivityProfile) -> RiskFactors:
        """Average the channel profiles and score them with the connectivity index"""
        averages = average_features(profiles)
        return self.compute_factors(averages["delta_theta"], averages["alpha"],
                                    averages["complexity"], averages["spike_rate"],
                                    connectivity.synchronization_index)

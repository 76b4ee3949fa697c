"""
Headline biomarker summaries and risk level classification
"""

from typing import List

from ..core.config import RiskCalibration
from ..core.data_types import BiomarkerSummary, ChannelSpectralProfile, ConnectivityProfile
from .risk import average_features


def classify_risk_level(score: float, calibration: RiskCalibration = None) -> str:
    """Bucket a 0-100 score into Low / Moderate / High"""
    if calibration is None:
        calibration = RiskCalibration()
    for upper, label in calibration.risk_levels:
        if score <= upper:
            return label
    return calibration.risk_levels[-1][1]


def summarize_biomarkers(profiles: List[ChannelSpectralProfile],
                         connectivity: ConnectivityProfile,
                         calibration: RiskCalibration = None) -> List[BiomarkerSummary]:
    """
    Build the four headline biomarkers with their normal ranges

    Slow-wave ratio and spike frequency are abnormal above their range;
    alpha power and synchronization are abnormal below it.
    """
    if calibration is None:
        calibration = RiskCalibration()
    ranges = calibration.biomarker_ranges
    averages = average_features(profiles)

    def summary(name: str, value: float, high_is_abnormal: bool) -> BiomarkerSummary:
        low, high = ranges[name]
        abnormal = value > high if high_is_abnormal else value < low
        return BiomarkerSummary(name=name, value=value, normal_range=(low, high),
                                is_abnormal=bool(abnormal))

    return [
        summary("Delta/Theta Ratio", averages["delta_theta"], True),
        summary("Average Alpha Power", averages["alpha"], False),
        summary("Brain Synchronization", connectivity.synchronization_index, False),
        summary("Spike Frequency (Hz)", averages["spike_rate"], True),
    ]

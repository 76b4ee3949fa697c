"""
Rule-based statistical screen

A coarse score built only from basic channel statistics: the share of
anomalous channels plus stepped points for high mean variance and high
mean peak-to-peak amplitude. Serves as a fallback summary when spectral
analysis is not wanted.
"""

import logging

import numpy as np

from ..core.config import AnomalyThresholds, RiskCalibration
from ..core.data_types import Recording, ScreeningResult
from ..processing.statistics import compute_channel_statistics
from .biomarkers import classify_risk_level


def _stepped_points(value: float, steps) -> float:
    # Highest threshold first; the first one exceeded wins
    for threshold, points in sorted(steps, reverse=True):
        if value > threshold:
            return points
    return 0.0


def screen_recording(recording: Recording, thresholds: AnomalyThresholds = None,
                     calibration: RiskCalibration = None) -> ScreeningResult:
    """
    Score a recording from its basic statistics alone

    Args:
        recording: Recording to screen
        thresholds: Anomaly thresholds (defaults if None)
        calibration: Supplies the screen steps and risk level cut-offs
            (defaults if None)

    Returns:
        ScreeningResult: Score 0-100 (rounded), level, confidence and the
        anomalous channel names
    """
    if calibration is None:
        calibration = RiskCalibration()

    n_channels = len(recording.channels)
    if n_channels == 0:
        return ScreeningResult(score=0.0, level=classify_risk_level(0.0, calibration),
                               confidence=0.0, anomalous_channels=[])

    stats = [compute_channel_statistics(ch, thresholds) for ch in recording.channels]
    anomalous = [s.channel_name for s in stats if s.is_anomalous]

    score = len(anomalous) / n_channels * calibration.screen_anomaly_points
    score += _stepped_points(float(np.mean([s.variance for s in stats])),
                             calibration.screen_variance_steps)
    score += _stepped_points(float(np.mean([s.peak_to_peak for s in stats])),
                             calibration.screen_peak_to_peak_steps)
    score = float(min(100, round(score)))

    confidence = float(round(min(100.0, 70.0 + n_channels / calibration.screen_full_confidence * 30.0)))
    level = classify_risk_level(score, calibration)

    logging.info(f"Statistical screen: score={score:.0f} ({level}), "
                 f"{len(anomalous)}/{n_channels} anomalous channels")
    return ScreeningResult(score=score, level=level, confidence=confidence,
                           anomalous_channels=anomalous)

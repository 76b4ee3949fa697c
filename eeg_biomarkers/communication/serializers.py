"""
Result serialization

Formats AggregateMetrics into JSON-ready dictionaries with camelCase
field names for external consumers (storage, dashboards, report writers).
"""

import json
import logging
from typing import Any, Dict

from ..core.data_types import AggregateMetrics, ChannelSpectralProfile, ScreeningResult


def _profile_to_dict(profile: ChannelSpectralProfile) -> Dict[str, Any]:
    return {
        "channel": profile.channel_name,
        "bands": {
            name: {"power": float(band.absolute_power),
                   "relative": float(band.relative_power_percent)}
            for name, band in profile.bands.items()
        },
        "deltaTheta": float(profile.delta_theta_ratio),
        "alphaAbsolute": float(profile.alpha_absolute_power),
        "complexity": float(profile.complexity),
        "spikeFrequency": float(profile.spike_rate_hz),
    }


def metrics_to_dict(metrics: AggregateMetrics) -> Dict[str, Any]:
    """
    Convert pipeline output into plain Python types

    Args:
        metrics: Pipeline output

    Returns:
        Dict[str, Any]: Only str, float, int, bool, list and dict values
    """
    conn = metrics.connectivity
    factors = metrics.risk_factors
    return {
        "spectralAnalyses": [_profile_to_dict(p) for p in metrics.channel_profiles],
        "connectivity": {
            "localCoherence": float(conn.local_coherence),
            "remoteCoherence": float(conn.remote_coherence),
            "synchronization": float(conn.synchronization_index),
            "frontalPower": float(conn.frontal_power),
            "temporalPower": float(conn.temporal_power),
        },
        "riskFactors": {
            "deltaTheta": float(factors.delta_theta),
            "reducedAlpha": float(factors.reduced_alpha),
            "complexity": float(factors.complexity),
            "connectivity": float(factors.connectivity),
            "anomalies": float(factors.anomalies),
        },
        "riskScore": float(metrics.risk_score),
        "riskLevel": metrics.risk_level,
        "biomarkers": [
            {
                "name": b.name,
                "value": float(b.value),
                "normal": [float(b.normal_range[0]), float(b.normal_range[1])],
                "abnormal": bool(b.is_abnormal),
            }
            for b in metrics.biomarker_summaries
        ],
        "anomalousChannels": list(metrics.anomalous_channels),
    }


def screening_to_dict(result: ScreeningResult) -> Dict[str, Any]:
    return {
        "riskScore": float(result.score),
        "riskLevel": result.level,
        "confidence": float(result.confidence),
        "anomalousChannels": list(result.anomalous_channels),
    }


def save_json(payload: Dict[str, Any], path: str) -> None:
    """Write a serialized result to disk"""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    logging.info(f"Results written to: {path}")

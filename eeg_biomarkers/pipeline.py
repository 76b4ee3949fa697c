"""
Biomarker extraction pipeline

Composes the per-channel engines, connectivity and risk scoring into one
AggregateMetrics result. The pipeline reads nothing and writes nothing;
the same recording and config always give the same metrics.

Stage 1 (statistics + spectral profile per channel) has no cross-channel
dependency and runs in a joblib worker pool. Stage 2 (connectivity) waits
for every channel, then scoring runs on the collected results.
"""

import logging
from typing import List

from joblib import Parallel, delayed

from .core.config import AnalysisConfig, validate_config
from .core.data_types import AggregateMetrics, ChannelSpectralProfile, Recording
from .processing.connectivity import compute_connectivity
from .processing.spectral import SpectralAnalyzer
from .processing.statistics import compute_channel_statistics
from .scoring.biomarkers import classify_risk_level, summarize_biomarkers
from .scoring.risk import RiskScorer


def analyze_channels(recording: Recording, analyzer: SpectralAnalyzer,
                     n_jobs: int = -1) -> List[ChannelSpectralProfile]:
    """
    Spectral profile for every channel, in recording order

    Args:
        recording: Recording to analyze
        analyzer: Configured spectral analyzer
        n_jobs: joblib worker count (1 runs in-process)

    Returns:
        List[ChannelSpectralProfile]: One profile per channel
    """
    channels = recording.channels
    if n_jobs == 1 or len(channels) < 2:
        return [analyzer.analyze_channel(ch) for ch in channels]

    logging.debug(f"Analyzing {len(channels)} channels with n_jobs={n_jobs}")
    return Parallel(n_jobs=n_jobs)(delayed(analyzer.analyze_channel)(ch) for ch in channels)


def analyze_recording(recording: Recording, config: AnalysisConfig = None) -> AggregateMetrics:
    """
    Run the full biomarker pipeline on one recording

    Args:
        recording: Parsed recording
        config: Analysis configuration (defaults if None)

    Returns:
        AggregateMetrics: Profiles, connectivity, risk factors, score and
        biomarker summaries
    """
    if config is None:
        config = AnalysisConfig()
    validate_config(config)

    logging.info(f"Analyzing recording: {len(recording.channels)} channels, "
                 f"{recording.duration_seconds:.1f}s @ {recording.sampling_rate_hz} Hz")

    channel_stats = [compute_channel_statistics(ch, config.anomaly) for ch in recording.channels]
    anomalous = [s.channel_name for s in channel_stats if s.is_anomalous]

    profiles = analyze_channels(recording, SpectralAnalyzer(config.spectral), config.n_jobs)

    connectivity = compute_connectivity(recording, config.montage, config.remote_coherence_offset)

    risk_factors = RiskScorer(config.risk).score_profiles(profiles, connectivity)
    risk_score = risk_factors.total
    risk_level = classify_risk_level(risk_score, config.risk)

    logging.info(f"Risk score: {risk_score:.1f} ({risk_level})")

    return AggregateMetrics(
        channel_profiles=profiles,
        connectivity=connectivity,
        risk_factors=risk_factors,
        risk_score=risk_score,
        risk_level=risk_level,
        biomarker_summaries=summarize_biomarkers(profiles, connectivity, config.risk),
        channel_statistics=channel_stats,
        anomalous_channels=anomalous,
    )

"""
Main CLI entry point for EEG Biomarkers

This module provides the command-line interface for analyzing recordings,
inspecting EDF headers and checking montage coverage.
"""

import argparse
import json
import logging
import sys

from ..core.config import DEFAULT_SAMPLING_RATE, AnalysisConfig, load_config
from ..core.data_types import AggregateMetrics, Recording
from ..core.exceptions import EEGBiomarkerError
from ..acquisition.sources import (EDF_HEADER_SIZE, SyntheticRecordingSource, load_recording,
                                   read_edf_header)
from ..communication.serializers import metrics_to_dict, save_json, screening_to_dict
from ..pipeline import analyze_recording
from ..scoring.screening import screen_recording
from ..utils.channel_finder import print_channel_report


def print_summary(metrics: AggregateMetrics) -> None:
    """Print a human-readable summary of one analysis"""
    print(f"\nRisk score: {metrics.risk_score:.1f} / 100 ({metrics.risk_level})")
    print("-" * 40)
    factors = metrics.risk_factors
    print(f"  Delta/Theta:     {factors.delta_theta:5.1f} / 25")
    print(f"  Reduced alpha:   {factors.reduced_alpha:5.1f} / 20")
    print(f"  Complexity:      {factors.complexity:5.1f} / 15")
    print(f"  Connectivity:    {factors.connectivity:5.1f} / 15")
    print(f"  Anomalies:       {factors.anomalies:5.1f} / 25")

    print("\nBiomarkers:")
    for b in metrics.biomarker_summaries:
        flag = "ABNORMAL" if b.is_abnormal else "normal"
        print(f"  {b.name:<24} {b.value:10.3f}  [{b.normal_range[0]}-{b.normal_range[1]}]  {flag}")

    if metrics.anomalous_channels:
        print(f"\nAnomalous channels: {', '.join(metrics.anomalous_channels)}")


def run_analysis(recording: Recording, config: AnalysisConfig, args: argparse.Namespace) -> int:
    """Analyze one recording and report or save the result"""
    if args.jobs is not None:
        config.n_jobs = args.jobs

    if args.screen:
        result = screen_recording(recording, config.anomaly, config.risk)
        payload = screening_to_dict(result)
        print(f"Statistical screen: {result.score:.0f} / 100 ({result.level}), "
              f"confidence {result.confidence:.0f}%")
    else:
        metrics = analyze_recording(recording, config)
        payload = metrics_to_dict(metrics)
        print_summary(metrics)

    if args.output:
        save_json(payload, args.output)
    return 0


def show_header(path: str) -> int:
    """Print the fixed-offset header fields of an EDF file"""
    with open(path, "rb") as f:
        header = read_edf_header(f.read(EDF_HEADER_SIZE))
    print(json.dumps({
        "version": header.version,
        "patientId": header.patient_id,
        "recordingId": header.recording_id,
        "recordCount": header.record_count,
        "channelCount": header.channel_count,
    }, indent=2))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="EEG Biomarkers - Spectral and connectivity biomarker extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a CSV export and save the metrics
  python -m eeg_biomarkers --analyze data/session.csv --output metrics.json

  # Quick statistical screen only
  python -m eeg_biomarkers --analyze data/session.csv --screen

  # Test with synthetic data
  python -m eeg_biomarkers --fake --seed 7

  # Inspect an EDF header
  python -m eeg_biomarkers --header data/session.edf
        """
    )

    # Mode selection (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument("--analyze", metavar="FILE",
                            help="Analyze a recording (.csv, .txt or .edf)")
    mode_group.add_argument("--fake", action="store_true",
                            help="Analyze a synthetic recording")
    mode_group.add_argument("--header", metavar="FILE",
                            help="Print the header of an EDF file")
    mode_group.add_argument("--list-channels", metavar="FILE",
                            help="Show which montage electrodes a recording contains")

    # Input options
    parser.add_argument("--fs", type=float, default=None,
                        help="Sampling frequency for text files (default: config sampling_rate)")
    parser.add_argument("--duration", type=float, default=10.0,
                        help="Synthetic recording duration in seconds (default: 10)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for synthetic data")

    # Analysis options
    parser.add_argument("--config",
                        help="JSON config overriding montage, thresholds and calibration")
    parser.add_argument("--jobs", type=int, default=None,
                        help="Parallel workers for per-channel analysis (default: all cores)")
    parser.add_argument("--screen", action="store_true",
                        help="Run the rule-based statistical screen instead of full analysis")
    parser.add_argument("--output", "-o",
                        help="Write results as JSON to this path")

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")

    return parser


def main(argv=None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        if args.header:
            return show_header(args.header)

        config = load_config(args.config)
        fs = args.fs or config.sampling_rate

        if args.fake:
            logging.info("Using synthetic EEG data")
            recording = SyntheticRecordingSource(fs, seed=args.seed).generate_recording(args.duration)
        else:
            recording = load_recording(args.analyze or args.list_channels, fs)

        if args.list_channels:
            print_channel_report(recording, config.montage)
            return 0

        return run_analysis(recording, config, args)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 0
    except (EEGBiomarkerError, OSError) as e:
        logging.error(f"{e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

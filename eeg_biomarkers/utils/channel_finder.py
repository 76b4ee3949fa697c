"""
Montage channel finder

Reports which of the montage's region electrodes are present in a
recording. Region power is normalized by the full electrode set, so a
missing electrode silently lowers frontal/temporal power; this makes the
gap visible before analysis.
"""

import logging
from typing import Dict, List, Tuple

from ..core.config import Montage
from ..core.data_types import Recording


def find_montage_channels(recording: Recording, montage: Montage = None) -> Dict[str, Dict[str, List[str]]]:
    """
    Match recording channel names against the montage regions

    Args:
        recording: Recording to inspect
        montage: Electrode groups (10-20 if None)

    Returns:
        Dict: ``{"frontal": {"present": [...], "missing": [...]}, "temporal": {...}}``
    """
    if montage is None:
        montage = Montage()

    names = set(recording.channel_names)
    regions = {"frontal": montage.frontal, "temporal": montage.temporal}

    report = {}
    for region, electrodes in regions.items():
        present = [e for e in electrodes if e in names]
        missing = [e for e in electrodes if e not in names]
        if missing:
            logging.debug(f"{region} electrodes missing from recording: {missing}")
        report[region] = {"present": present, "missing": missing}
    return report


def electrode_positions(recording: Recording, montage: Montage = None) -> Dict[str, Tuple[float, float]]:
    """Scalp coordinates of the recording channels the montage can place, in recording order"""
    if montage is None:
        montage = Montage()
    return {name: montage.positions[name] for name in recording.channel_names
            if name in montage.positions}


def print_channel_report(recording: Recording, montage: Montage = None) -> Dict[str, Dict[str, List[str]]]:
    """Print the montage coverage of a recording and return the report"""
    if montage is None:
        montage = Montage()
    report = find_montage_channels(recording, montage)

    print(f"Recording channels ({len(recording.channels)} @ {recording.sampling_rate_hz} Hz)")
    print("=" * 50)
    print(", ".join(recording.channel_names))

    print(f"\nMontage: {montage.name}")
    print("-" * 30)
    for region, matches in report.items():
        print(f"\n{region.capitalize()}:")
        for electrode in matches["present"]:
            print(f"  {electrode}: present ✓")
        for electrode in matches["missing"]:
            print(f"  {electrode}: not available ✗")

    positions = electrode_positions(recording, montage)
    unplaced = [name for name in recording.channel_names if name not in positions]
    print(f"\nScalp positions: {len(positions)} of {len(recording.channels)} channels placed")
    if unplaced:
        print(f"  No position for: {', '.join(unplaced)}")

    return report

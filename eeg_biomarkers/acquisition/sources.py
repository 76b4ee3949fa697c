"""
EEG recording sources

This module turns files into Recording objects: delimited text exports,
EDF files (fixed-offset header reader, samples decoded by MNE), and a
seeded synthetic source for demos and testing.
"""

import logging
import os
from typing import List, Optional

import numpy as np
import pandas as pd

from ..core.config import DEFAULT_SAMPLING_RATE
from ..core.data_types import Channel, Recording, RecordingHeader
from ..core.exceptions import EEGFormatError, UnsupportedFormatError

# Optional import with fallback
try:
    import mne
    MNE_AVAILABLE = True
except ImportError:
    MNE_AVAILABLE = False
    logging.warning("MNE not available - EDF sample decoding disabled")

TEXT_EXTENSIONS = ("csv", "txt")
EDF_EXTENSIONS = ("edf",)

# EDF fixed header layout: field -> (offset, length)
EDF_HEADER_SIZE = 256
EDF_FIELDS = {
    "version": (0, 8),
    "patient_id": (8, 80),
    "recording_id": (88, 80),
    "record_count": (236, 8),
    "channel_count": (252, 4),
}

# Standard 10-20 names used by the synthetic source
STANDARD_CHANNELS = ["Fp1", "Fp2", "F7", "F3", "Fz", "F4", "F8", "T7",
                     "C3", "Cz", "C4", "T8", "P7", "Pz", "P8", "O1"]


def _is_number(token: str) -> bool:
    return not pd.isna(pd.to_numeric(token.strip(), errors="coerce"))


def parse_delimited_text(content: str, sampling_rate: float = DEFAULT_SAMPLING_RATE) -> Recording:
    """
    Parse a comma-delimited EEG export

    The first line holds channel names. A leading timestamp column is
    assumed when the first header token mentions "time" or when the first
    value of the first data row is numeric. Rows with fewer fields than
    channels are skipped; non-numeric cells are dropped from their channel.

    Args:
        content: Full file text
        sampling_rate: Sampling frequency in Hz (text exports carry none)

    Returns:
        Recording: One channel per header column

    Raises:
        EEGFormatError: If there is no header row plus at least one data row
    """
    lines = content.strip().splitlines()
    if len(lines) < 2:
        raise EEGFormatError("Text recording must have a header row and at least one data row")

    headers = [h.strip() for h in lines[0].split(",")]
    first_value = lines[1].split(",")[0]
    has_timestamp = "time" in headers[0].lower() or _is_number(first_value)

    names = headers[1:] if has_timestamp else headers
    n_channels = len(names)
    start = 1 if has_timestamp else 0

    rows = []
    skipped = 0
    for line in lines[1:]:
        fields = line.split(",")
        if len(fields) < n_channels:
            skipped += 1
            continue
        cells = fields[start:start + n_channels]
        rows.append(cells + [""] * (n_channels - len(cells)))

    if skipped:
        logging.warning(f"Skipped {skipped} rows with fewer than {n_channels} fields")

    if rows:
        frame = pd.DataFrame(rows, dtype=str)
        numeric = frame.apply(lambda col: pd.to_numeric(col.str.strip(), errors="coerce"))
    else:
        numeric = pd.DataFrame(np.empty((0, n_channels)))

    channels = []
    for i, name in enumerate(names):
        values = numeric.iloc[:, i].to_numpy(dtype=np.float64)
        values = values[np.isfinite(values)]
        channels.append(Channel(name=name or f"CH{i + 1}", samples=values,
                                sampling_rate_hz=sampling_rate))

    logging.info(f"Parsed text recording: {n_channels} channels, {len(rows)} rows "
                 f"(timestamp column: {has_timestamp})")
    return Recording(channels=channels, sampling_rate_hz=sampling_rate)


def load_csv(path: str, sampling_rate: float = DEFAULT_SAMPLING_RATE) -> Recording:
    """Read a delimited text file from disk and parse it"""
    with open(path, "r", encoding="utf-8") as f:
        return parse_delimited_text(f.read(), sampling_rate)


def read_edf_header(data: bytes) -> RecordingHeader:
    """
    Read the fixed-offset fields of an EDF header

    Args:
        data: At least the first 256 bytes of the file

    Returns:
        RecordingHeader: Version, identifiers and record/channel counts

    Raises:
        EEGFormatError: If the header is truncated or a count is not an integer
    """
    if len(data) < EDF_HEADER_SIZE:
        raise EEGFormatError(f"EDF header truncated: {len(data)} of {EDF_HEADER_SIZE} bytes")

    def field(name: str) -> str:
        offset, length = EDF_FIELDS[name]
        return data[offset:offset + length].decode("ascii", errors="replace").strip()

    try:
        record_count = int(field("record_count"))
        channel_count = int(field("channel_count"))
    except ValueError as e:
        raise EEGFormatError(f"Failed to parse EDF header: {e}") from e

    return RecordingHeader(
        version=field("version"),
        patient_id=field("patient_id"),
        recording_id=field("recording_id"),
        record_count=record_count,
        channel_count=channel_count,
    )


def load_edf(path: str) -> Recording:
    """
    Load an EDF file

    The header is read at fixed offsets; sample records are decoded with
    MNE and converted from volts to microvolts.

    Raises:
        EEGFormatError: If the header is unreadable or MNE is unavailable
    """
    with open(path, "rb") as f:
        header = read_edf_header(f.read(EDF_HEADER_SIZE))
    logging.info(f"EDF header: version={header.version!r} records={header.record_count} "
                 f"channels={header.channel_count}")

    if not MNE_AVAILABLE:
        raise EEGFormatError("EDF sample decoding requires MNE. Install with: pip install mne")

    try:
        raw = mne.io.read_raw_edf(path, preload=False, verbose=False)
    except (ValueError, RuntimeError) as e:
        raise EEGFormatError(f"Failed to decode EDF samples: {e}") from e

    try:
        fs = float(raw.info["sfreq"])
        data = raw.get_data() * 1e6
    finally:
        raw.close()
    channels = [Channel(name=name, samples=data[i], sampling_rate_hz=fs)
                for i, name in enumerate(raw.ch_names)]
    return Recording(channels=channels, sampling_rate_hz=fs,
                     duration_seconds=data.shape[1] / fs, header=header)


def load_recording(path: str, sampling_rate: Optional[float] = None) -> Recording:
    """
    Load a recording, choosing the reader from the file extension

    Args:
        path: Recording file path
        sampling_rate: Override for text formats (default 256 Hz)

    Returns:
        Recording: Parsed recording

    Raises:
        FileNotFoundError: If the file doesn't exist
        UnsupportedFormatError: If the extension is not csv, txt or edf
        EEGFormatError: If the file is empty or unreadable
    """
    extension = os.path.splitext(path)[1].lower().lstrip(".")
    if extension not in TEXT_EXTENSIONS + EDF_EXTENSIONS:
        raise UnsupportedFormatError(f"Unsupported file format: {extension or '<none>'}")

    if not os.path.exists(path):
        raise FileNotFoundError(f"Recording file not found: {path}")

    logging.info(f"Loading recording from: {path}")
    if extension in EDF_EXTENSIONS:
        return load_edf(path)
    return load_csv(path, sampling_rate if sampling_rate is not None else DEFAULT_SAMPLING_RATE)


class SyntheticRecordingSource:
    """
    Generate synthetic EEG recordings for demos and testing

    Each channel carries background noise, a posterior-weighted alpha
    rhythm, a theta component and frontal beta. Output is reproducible for
    a given seed.
    """

    def __init__(self, fs: float = DEFAULT_SAMPLING_RATE, channel_names: List[str] = None,
                 seed: Optional[int] = None):
        self.fs = fs
        self.channel_names = channel_names if channel_names is not None else list(STANDARD_CHANNELS)
        self.rng = np.random.default_rng(seed)

    def generate_recording(self, duration_sec: float = 10.0) -> Recording:
        """
        Generate a synthetic recording

        Args:
            duration_sec: Duration of data to generate

        Returns:
            Recording: Synthetic recording with the configured channel names
        """
        n_samples = int(duration_sec * self.fs)
        t = np.arange(n_samples) / self.fs

        channels = []
        for name in self.channel_names:
            data = self.rng.standard_normal(n_samples) * 10

            # Alpha rhythm (8-12 Hz) - stronger posteriorly
            alpha_amp = 20 if name[0] in "PO" else 10
            data += alpha_amp * np.sin(2 * np.pi * 10 * t + self.rng.random() * 2 * np.pi)

            # Theta rhythm (4-8 Hz)
            data += 6 * np.sin(2 * np.pi * 6 * t + self.rng.random() * 2 * np.pi)

            # Beta rhythm (13-30 Hz) - stronger frontally
            if name.startswith("F"):
                data += 8 * np.sin(2 * np.pi * 20 * t + self.rng.random() * 2 * np.pi)

            channels.append(Channel(name=name, samples=data, sampling_rate_hz=self.fs))

        return Recording(channels=channels, sampling_rate_hz=self.fs, duration_seconds=duration_sec)

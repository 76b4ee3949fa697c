"""
EEG recording sources

This module handles loading recordings from delimited text and EDF files,
and synthetic recording generation.
"""

from .sources import (load_recording, load_csv, load_edf, parse_delimited_text,
                      read_edf_header, SyntheticRecordingSource)

__all__ = ['load_recording', 'load_csv', 'load_edf', 'parse_delimited_text',
           'read_edf_header', 'SyntheticRecordingSource']

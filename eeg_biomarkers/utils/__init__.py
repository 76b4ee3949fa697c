"""
Utility functions and helpers

This module contains helper tools for inspecting recordings.
"""

from .channel_finder import electrode_positions, find_montage_channels, print_channel_report

__all__ = ['electrode_positions', 'find_montage_channels', 'print_channel_report']

"""
Utility modules for the availability monitor.
"""

from .duration import parse_duration, format_duration

__all__ = ['parse_duration', 'format_duration']

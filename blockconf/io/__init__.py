"""
Event sources feeding the configuration reader.
"""

from .sax_source import iter_sax_events

__all__ = ["iter_sax_events"]

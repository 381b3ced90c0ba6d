"""Delay lines, allpass filters, filter coefficient designs, envelopes and reverb settings."""

__version__ = "0.1.0"
__all__ = [
    "utils",
    "slot",
    "delay",
    "revbase",
    "allpass",
    "modallpass",
    "biquad",
    "efilter",
]
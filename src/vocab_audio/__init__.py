"""Narrated bilingual vocabulary audio from two-column word lists."""

__version__ = "0.1.0"

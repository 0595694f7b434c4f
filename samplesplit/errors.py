"""Exceptions raised by the splitter and the archive writer."""

from __future__ import annotations


class SampleSplitError(Exception):
    pass


class DecodeUnavailable(SampleSplitError):
    """The input could not be interpreted as an audio buffer."""


class WaveEncodingError(SampleSplitError):
    """A WAV header field does not fit its fixed width."""


class ArchiveTooLarge(SampleSplitError):
    """A ZIP size, offset or count exceeds the format's field capacity."""


__all__ = ["ArchiveTooLarge", "DecodeUnavailable", "SampleSplitError", "WaveEncodingError"]

"""Split recordings on silence and package the pieces as a sample pack."""

from .archive.sample_pack import archive_filename, build_manifest, pack_samples
from .archive.zip_writer import ArchiveEntry, pack
from .audio.silence_splitter import SilenceSplitter, segment
from .audio.types import AudioBuffer, Sample, SilenceRegion
from .audio.wav_codec import encode_wav
from .errors import ArchiveTooLarge, DecodeUnavailable, SampleSplitError, WaveEncodingError
from .processor import SampleProcessor

__all__ = [
    "ArchiveEntry",
    "ArchiveTooLarge",
    "AudioBuffer",
    "DecodeUnavailable",
    "Sample",
    "SampleProcessor",
    "SampleSplitError",
    "SilenceRegion",
    "SilenceSplitter",
    "WaveEncodingError",
    "archive_filename",
    "build_manifest",
    "encode_wav",
    "pack",
    "pack_samples",
    "segment",
]

"""Split a local recording on silence and write a sample-pack ZIP."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from samplesplit.errors import SampleSplitError
from samplesplit.params import DEFAULT_MIN_SILENCE_MS, DEFAULT_SILENCE_THRESHOLD_DB
from samplesplit.processor import SampleProcessor

LOGGER = logging.getLogger("samplesplit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split an audio file into samples at silence gaps.")
    parser.add_argument("input", type=Path, help="Audio file to split (wav, flac, ogg, mp3...).")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("."),
        help="Directory for the generated sample pack (default: current directory).",
    )
    parser.add_argument(
        "--min-silence-ms",
        type=float,
        default=DEFAULT_MIN_SILENCE_MS,
        help="Minimum silence length that separates two samples, 100-2000 ms (default: %(default)s).",
    )
    parser.add_argument(
        "--threshold-db",
        type=float,
        default=DEFAULT_SILENCE_THRESHOLD_DB,
        help="Amplitude below which audio counts as silence, -60 to -10 dB (default: %(default)s).",
    )
    parser.add_argument("--write-wavs", action="store_true", help="Also write each sample as a loose WAV file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    processor = SampleProcessor()
    try:
        samples = processor.process_bytes(args.input.read_bytes(), args.min_silence_ms, args.threshold_db)
        if not samples:
            LOGGER.warning("No samples detected in %s; try different thresholds", args.input)
            return 1
        archive_name, payload = processor.build_pack(samples, args.input.name)
    except (OSError, SampleSplitError) as exc:
        LOGGER.error("Failed to split %s: %s", args.input, exc)
        return 2

    args.output.mkdir(parents=True, exist_ok=True)
    (args.output / archive_name).write_bytes(payload)
    if args.write_wavs:
        for sample in samples:
            (args.output / sample.filename).write_bytes(sample.encoded)
    for sample in samples:
        LOGGER.info("%s  %7.0f ms  %6.1f dBFS", sample.filename, sample.duration_ms, sample.level_dbfs)
    LOGGER.info("Wrote %s (%d samples)", args.output / archive_name, len(samples))
    return 0


if __name__ == "__main__":
    sys.exit(main())

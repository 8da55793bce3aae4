"""
Tone-scale detection pipeline.

Loads pitch observations, folds them into a pitch-class histogram,
detects the peaks and writes them as a Scala (.scl) file.

Usage::

    python -m ingestion.detect_scale data/observations/take1.txt \\
        --output out/take1.scl --window 5 --threshold 15 --smooth 0.8
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from core.config import (
    DEFAULT_HISTOGRAM_CONFIG,
    DEFAULT_PEAK_CONFIG,
    HistogramConfig,
    PeakDetectionConfig,
)
from core.pitch.annotations import build_pitch_class_histogram
from core.pitch.peaks import detect_tone_scale
from core.pitch.scala import ScaleDefinition
from ingestion.annotation_loader import load_annotations
from ingestion.scala_loader import write_scala_file

logger = logging.getLogger(__name__)


def run_detection(
    observations_path: str | Path,
    output_path: str | Path | None = None,
    *,
    histogram_config: HistogramConfig = DEFAULT_HISTOGRAM_CONFIG,
    peak_config: PeakDetectionConfig = DEFAULT_PEAK_CONFIG,
    min_probability: float = 0.0,
    weighted: bool = False,
    description: str | None = None,
) -> ScaleDefinition:
    """Detect the tone scale of one observation file.

    Args:
        observations_path: Observation file (see ingestion/annotation_loader.py).
        output_path: Where to write the .scl file. None skips writing.
        histogram_config: Pitch-class histogram resolution.
        peak_config: Detection window, threshold and optional smoothing.
        min_probability: Drop observations at or below this probability.
        weighted: Weight each observation by its probability.
        description: Scale description. Defaults to one naming the source.

    Returns:
        The detected scale (pitches ascending, unnamed).
    """
    source = Path(observations_path)
    annotations = load_annotations(source)
    histogram = build_pitch_class_histogram(
        annotations,
        config=histogram_config,
        min_probability=min_probability,
        weighted=weighted,
    )
    if histogram.max_bin_count() == 0.0:
        logger.warning("No usable observations in %s", source)

    positions = detect_tone_scale(histogram, peak_config)
    logger.info("Detected %d peak(s) in %s", len(positions), source.name)

    scale = ScaleDefinition(
        description=description or f"Tone scale detected in {source.name}",
        pitches=positions,
    )
    if output_path is not None:
        write_scala_file(scale, output_path)
    return scale


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect a tone scale from pitch observations and write it as .scl.",
    )
    parser.add_argument("observations", metavar="PATH", help="Observation file.")
    parser.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        default=None,
        help="Destination .scl file (default: print only).",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=DEFAULT_PEAK_CONFIG.window_size,
        metavar="N",
        help=f"Peak window in classes (default: {DEFAULT_PEAK_CONFIG.window_size}).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_PEAK_CONFIG.threshold,
        help=f"Minimum peak prominence (default: {DEFAULT_PEAK_CONFIG.threshold}).",
    )
    parser.add_argument(
        "--smooth",
        type=float,
        default=None,
        metavar="SIGMA",
        help="Gaussian smoothing in cents before detection (default: off).",
    )
    parser.add_argument(
        "--classes",
        type=int,
        default=DEFAULT_HISTOGRAM_CONFIG.n_classes,
        metavar="N",
        help=f"Histogram classes per octave (default: {DEFAULT_HISTOGRAM_CONFIG.n_classes}).",
    )
    parser.add_argument(
        "--min-probability",
        type=float,
        default=0.0,
        metavar="P",
        help="Ignore observations at or below this probability (default: 0.0).",
    )
    parser.add_argument(
        "--weighted",
        action="store_true",
        default=False,
        help="Weight observations by their probability.",
    )
    parser.add_argument("--description", default=None, help="Scale description line.")
    parser.add_argument("--verbose", action="store_true", default=False, help="Debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and run the detection pipeline."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        histogram_config = HistogramConfig(n_classes=args.classes)
        peak_config = PeakDetectionConfig(
            window_size=args.window,
            threshold=args.threshold,
            smooth_sigma=args.smooth,
        )
    except ValueError as exc:
        parser.error(str(exc))

    scale = run_detection(
        args.observations,
        args.output,
        histogram_config=histogram_config,
        peak_config=peak_config,
        min_probability=args.min_probability,
        weighted=args.weighted,
        description=args.description,
    )
    for pitch in scale.pitches:
        print(f"{pitch:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

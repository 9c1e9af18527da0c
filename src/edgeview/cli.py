"""Command line front-end: load an image, filter it, write a PNG."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import SAMPLE_IMAGE_URL, EngineSettings
from .core import FILTERS, FilterEngine, FilterKind, export_filename
from .core.filters import BACKENDS
from .errors import EdgeViewError
from .utils.image_io import is_url, load_image, save_png
from .utils.logging import get_logger

_LOGGER = logging.getLogger(__name__)


def build_argparser(settings: EngineSettings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="edgeview", description="Apply a pixel filter to an image")
    p.add_argument("image", nargs="?", help="Path or http(s) URL of the source image")
    p.add_argument("--sample", action="store_true", help="Use the built-in sample image URL")
    p.add_argument(
        "-f",
        "--filter",
        default=FilterKind.IDENTITY.slug,
        help="Filter name, e.g. grayscale, edge_detection, warm (default: normal)",
    )
    p.add_argument("-o", "--output", default=None, help="Output PNG path")
    p.add_argument("--max-width", type=int, default=settings.max_width)
    p.add_argument(
        "--backend",
        default=settings.backend,
        help=f"Executor backend: auto, {', '.join(BACKENDS)}",
    )
    p.add_argument("--list-filters", action="store_true", help="Print the filter catalogue and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def _print_catalogue() -> None:
    for info in FILTERS:
        print(f"{info.kind.slug:<16} {info.label:<12} {info.description}")


def _default_output(image: str, output: Optional[str], kind: FilterKind) -> Path:
    if output:
        return Path(output)
    name = export_filename(kind)
    # Remote sources land in the working directory.
    return Path(name) if is_url(image) else Path(image).with_name(name)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = EngineSettings.from_env()
    args = build_argparser(settings).parse_args(argv)
    logger = get_logger("DEBUG" if args.verbose else settings.log_level)

    if args.list_filters:
        _print_catalogue()
        return 0
    if args.sample and not args.image:
        args.image = SAMPLE_IMAGE_URL
    if not args.image:
        logger.error("No input image given")
        return 2

    try:
        kind = FilterKind.parse(args.filter)
        engine = FilterEngine(args.backend)
        source = load_image(args.image, max_width=max(1, args.max_width))
        result = engine.apply_buffer(source, kind)
        output = _default_output(args.image, args.output, kind)
        save_png(result.buffer, output)
    except EdgeViewError as exc:
        logger.error("%s", exc)
        return 1

    stats = result.stats
    _LOGGER.info("Wrote %s using %s backend", output, engine.backend)
    print(f"{stats.width}x{stats.height}  {stats.elapsed_ms:.2f}ms  {stats.fps} fps")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

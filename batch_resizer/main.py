"""CLI entry point."""
import argparse
import signal
import sys

from .resizer import MODES, BatchResizer
from .utils.cancellation import CancellationToken
from .utils.errors import CancelledError, ResizerError
from .utils.logger import get_logger

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Batch Image Resizer - Scale every image in a folder tree into JPEG copies"
    )

    parser.add_argument("input", help="Source directory (searched recursively)")
    parser.add_argument("output", help="Destination directory")

    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Scale factor applied to width and height (required unless --list)",
    )
    parser.add_argument(
        "--mode",
        choices=list(MODES),
        default=None,
        help="Processing strategy",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum concurrent files in concurrent mode",
    )
    parser.add_argument(
        "--backend",
        choices=["pillow", "opencv"],
        default=None,
        help="Image codec backend",
    )
    parser.add_argument(
        "--preset",
        choices=["low_memory", "throughput", "case_insensitive"],
        default=None,
        help="Use a preset configuration",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to custom YAML config file",
    )
    parser.add_argument(
        "--case-insensitive",
        action="store_true",
        help="Match image extensions regardless of case",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Delete every file in the destination before resizing",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Only print the images that would be processed",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.scale is None and not args.list:
        parser.error("--scale is required")

    # Build config overrides from CLI args
    overrides = {}

    if args.mode:
        overrides.setdefault("batch", {})["mode"] = args.mode
    if args.workers:
        overrides.setdefault("batch", {})["max_workers"] = args.workers
    if args.backend:
        overrides.setdefault("codec", {})["backend"] = args.backend
    if args.case_insensitive:
        overrides.setdefault("discovery", {})["case_sensitive"] = False

    token = CancellationToken()

    def _on_interrupt(signum, frame):
        logger.warning("Interrupt received, cancelling...")
        token.cancel()

    try:
        resizer = BatchResizer(
            config=overrides if overrides else None,
            config_path=args.config,
            preset=args.preset,
        )

        if args.list:
            for path in resizer.find_images(args.input):
                print(path)
            return 0

        if args.clean:
            resizer.clean(args.output)

        previous = signal.signal(signal.SIGINT, _on_interrupt)
        try:
            future = resizer.submit(args.input, args.output, args.scale, token)
            result = future.result()
        finally:
            signal.signal(signal.SIGINT, previous)

        logger.info(
            f"Success! {len(result.outputs)} images written to {args.output} "
            f"in {result.elapsed:.2f}s"
        )
        return 0

    except CancelledError:
        logger.warning("Resize cancelled; destination may be partially populated")
        return 130
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ResizerError as e:
        logger.error(f"Resize failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Resize failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

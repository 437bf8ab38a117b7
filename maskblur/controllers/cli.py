"""
Command-line interface controller
"""

import argparse
import logging
import sys
import os
from typing import List, Optional, Sequence

from maskblur.utils.config import (
    RunConfig, default_config, load_config, update_config
)
from maskblur.utils.errors import (
    ConfigurationError, MaskBlurError, NoConfidentMatchError
)
from maskblur.controllers.pipeline import run

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='maskblur',
        description='Find a mask pattern in an image and blur the best match',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  The following blurs a logo specified by logo.jpg on in.jpg, uses the
  500px high line at the bottom of in.jpg as the region of interest and
  writes the result to out.jpg:

  python -m maskblur -r 0,-500 -t 60 -i in.jpg -o out.jpg -v logo.jpg
        """
    )

    parser.add_argument('masks', nargs='*', metavar='mask',
                        help='Mask image(s) to search for')

    # Input/Output paths
    parser.add_argument('--input', '-i', type=str, default=None,
                        help='Path to input image')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Path to output image')

    # Configuration
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='Configuration YAML file; CLI options override it')

    # Search options
    parser.add_argument('--threshold', '-t', type=float, default=None,
                        help='Noise suppression threshold (0..255). Default: 80')
    parser.add_argument('--roi', '-r', type=str, default=None,
                        help='Region of interest as x,y,width,height. Negative x/y '
                             'count from the right/bottom edge; width and height '
                             'are unbounded by default')
    parser.add_argument('--min-similarity', '-s', type=float, default=None,
                        help='Minimum MSSIM (0..1) for a match to be accepted. Default: 0.1')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Give up when searching takes longer (seconds)')

    # Blur options
    parser.add_argument('--blur-deviation', '-d', type=int, default=None,
                        help='Gaussian blur deviation. Default: 10')
    parser.add_argument('--blur-kernel-size', '-k', type=int, default=None,
                        help='Gaussian blur kernel size (odd). Default: 3')
    parser.add_argument('--blur-margin', '-m', type=str, default=None,
                        help='Blur margin around the match as top,right,bottom,left. '
                             'Default: 0,0,0,0')

    # Processing options
    parser.add_argument('--dry-run', '-n', action='store_true', default=None,
                        help='Search and blur, but do not write the output')
    parser.add_argument('--debug-overlay', type=str, default=None,
                        help='Save a copy of the input with the match outlined')

    # Logging
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase verbosity (-vv for debug output)')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress non-error output')

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    return build_parser().parse_args(argv)


def setup_logging(verbosity: int = 0, quiet: bool = False) -> None:
    """
    Setup logging configuration based on CLI arguments

    Args:
        verbosity: Number of -v flags
        quiet: Only report errors
    """
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_config(args: argparse.Namespace) -> RunConfig:
    """
    Merge the optional YAML file with CLI overrides

    Args:
        args: Parsed command-line arguments

    Returns:
        Validated RunConfig
    """
    config = load_config(args.config) if args.config else default_config()

    overrides = {
        'paths': {
            'input': args.input,
            'output': args.output,
            'masks': args.masks or None,
            'debug_overlay': args.debug_overlay,
        },
        'search': {
            'threshold': args.threshold,
            'roi': args.roi,
            'min_similarity': args.min_similarity,
            'timeout': args.timeout,
        },
        'blur': {
            'kernel_size': args.blur_kernel_size,
            'deviation': args.blur_deviation,
            'margin': args.blur_margin,
        },
        'run': {
            'dry_run': args.dry_run,
            'verbosity': args.verbose or None,
        },
    }
    config = update_config(config, overrides)
    return RunConfig.from_dict(config)


def validate_paths(cfg: RunConfig) -> None:
    """
    Check that the input and mask files exist

    Raises:
        ConfigurationError: On the first missing file
    """
    for path in (cfg.input_path, *cfg.mask_paths):
        if not os.path.isfile(path):
            raise ConfigurationError(f"File '{path}' doesn't exist")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    try:
        cfg = build_config(args)
        validate_paths(cfg)
    except ConfigurationError as e:
        setup_logging(args.verbose, args.quiet)
        logger.error(str(e))
        build_parser().print_usage(sys.stderr)
        return EXIT_ERROR

    # -v wins over run.verbosity from the config file
    setup_logging(cfg.verbosity, args.quiet)

    try:
        result = run(cfg)
    except KeyboardInterrupt:
        logger.info("Processing interrupted by user")
        return EXIT_INTERRUPTED
    except NoConfidentMatchError as e:
        logger.error(f"Fatal error: {e}")
        return EXIT_NO_MATCH
    except MaskBlurError as e:
        logger.error(f"Fatal error: {e}")
        return EXIT_ERROR
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return EXIT_ERROR

    logger.info(f"Best match {result.rect} (MSSIM {result.score:.6f}) "
                f"from {result.candidate.mask_name}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
xkbconv CLI entry point
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
import traceback
from pathlib import Path

from xkbconv.__version__ import __version__
from xkbconv.log import level_for

EXIT_OK = 0
EXIT_CONVERSION_FAILED = 1
EXIT_BAD_CONFIG = 2


def setup_logging(debug: bool = False, trace: bool = False,
                  log_file: str | None = None) -> logging.Logger:
    """Setup logging to stderr and, optionally, a rotating file

    Args:
        debug: Enable debug level logging
        trace: Enable per-cell trace logging (implies debug)
        log_file: Optional path to a log file
    """
    logger = logging.getLogger('xkbconv')
    level = level_for(debug=debug, trace=trace)
    logger.setLevel(level)

    # Drop handlers from a previous call (tests call main() repeatedly)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10*1024*1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('xkbconv: %(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    return logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='xkbconv',
        description='Convert an XKB layout (model/layout/variant/options) into a console keymap',
    )
    parser.add_argument('--model', default=None, help='XKB model (default: pc105)')
    parser.add_argument('--layout', default=None, help='XKB layout(s), comma separated (default: us)')
    parser.add_argument('--variant', default=None, help='XKB variant(s), comma separated')
    parser.add_argument('--options', default=None, help='XKB options, comma separated')
    parser.add_argument(
        '-p', '--print',
        dest='print_table',
        action='store_true',
        default=None,
        help='Print the resulting keymap'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Write the printed keymap or the XKB debug lines to this file instead of stdout'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to config file (default: ~/.config/xkbconv/config.json)'
    )
    parser.add_argument(
        '--xkb-debug',
        dest='xkb_debug',
        action='store_true',
        default=None,
        help='Print every XKB cell instead of building the keymap (also: LK_XKB_DEBUG=1)'
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--trace', action='store_true', help='Log every keymap cell')
    parser.add_argument('--logfile', default=None, help='Also log to this file')
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )
    return parser.parse_args(argv)


def _merge_args(config: dict, args: argparse.Namespace) -> dict:
    """CLI flags override config file values."""
    merged = dict(config)
    for key in ('model', 'layout', 'variant', 'options', 'print_table', 'xkb_debug'):
        value = getattr(args, key)
        if value is not None:
            merged[key] = value
    return merged


def main(argv: list[str] | None = None) -> int:
    """Main entry point for xkbconv"""
    args = parse_args(argv)
    log = setup_logging(debug=args.debug, trace=args.trace, log_file=args.logfile)

    # Import after args parsing to avoid import-time side effects
    from xkbconv.config import apply_environment, load_config, validate_config
    from xkbconv.core.converter import convert_xkb_keymap
    from xkbconv.core.errors import ConversionError
    from xkbconv.kernel.keymap import KernelKeymap

    try:
        config = load_config(args.config)
        config = validate_config(apply_environment(_merge_args(config, args)))
    except ValueError as e:
        log.error("Invalid configuration: %s", e)
        return EXIT_BAD_CONFIG

    log.debug("Effective config: %s", config)

    keymap = KernelKeymap()
    out = None
    try:
        if args.output and (config['print_table'] or config['xkb_debug']):
            out = open(args.output, 'w', encoding='utf-8')
        convert_xkb_keymap(
            keymap,
            config,
            print_table=config['print_table'],
            debug=config['xkb_debug'],
            out=out,
        )
    except ConversionError as e:
        log.error("%s", e)
        log.debug(traceback.format_exc())
        return EXIT_CONVERSION_FAILED
    except OSError as e:
        log.error("Cannot write keymap: %s", e)
        return EXIT_CONVERSION_FAILED
    finally:
        if out is not None:
            out.close()

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())

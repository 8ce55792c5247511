"""Command-line interface for wl-color-picker.

Entry point flow:
1. Normalize legacy arguments, then parse them
2. Resolve configuration (defaults, config file, environment, CLI)
3. Check the environment, select a pixel, capture it
4. Optionally adjust and name the color, then write it out and notify
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from . import __version__
from .capture import grab_color, select_region
from .color import PickResult
from .config import (
    Config,
    ConfigError,
    config_defaults,
    config_schema,
    config_to_dict,
    load_config,
    parse_delay,
    validate_config_file,
)
from .converter import detect_converter
from .dialog import adjust_color
from .environment import EnvironmentCheckError, check_environment
from .naming import annotate
from .outcome import Outcome, Status
from .output import NotificationError, OutputError, notify_picked, show_notification, write_color

log = logging.getLogger(__name__)

# Options whose value is the next token, whatever it looks like
VALUE_OPTIONS = {"--dest", "--delay", "--config"}
FLAG_OPTIONS = {
    "-h",
    "--help",
    "--version",
    "--print-defaults",
    "--print-config-schema",
    "--validate-config",
    "--print-resolved",
    "-c",
    "--copy",
    "--picker",
    "--notify",
    "--no-notify",
    "--debug",
}
HELP_ALIASES = {"help", "?"}


def normalize_args(argv: list[str]) -> list[str]:
    """Rewrite the legacy command line into something argparse understands.

    - ``--dest X`` becomes ``--dest=X`` so values such as ``-1`` or a
      missing value reach validation instead of tripping argparse
    - bare ``help`` and ``?`` become ``--help``
    - a bare ``clipboard`` becomes ``--dest=clipboard``
    - any other dash token that is not exactly a known flag (``--picker=yes``,
      ``-cx``) is dropped, like every other unknown token
    """
    tokens = []
    remaining = iter(argv)
    for token in remaining:
        if token in VALUE_OPTIONS:
            tokens.append(f"{token}={next(remaining, '')}")
        elif token in HELP_ALIASES:
            tokens.append("--help")
        elif token == "clipboard":
            tokens.append("--dest=clipboard")
        elif token in FLAG_OPTIONS or token.partition("=")[0] in VALUE_OPTIONS:
            tokens.append(token)
        elif token.startswith("-"):
            continue
        else:
            tokens.append(token)
    return tokens


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for CLI usage."""
    parser = argparse.ArgumentParser(
        prog="wl-color-picker",
        description="A basic wlroots compatible color picker.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  %(prog)s                        # Print the picked color
  %(prog)s -c --notify            # Print, copy to clipboard and notify
  %(prog)s --dest clipboard       # Only copy to clipboard
  %(prog)s --picker --delay 0.5   # Adjust the color in a dialog first

Environment:
  WL_PICKER_API=1                 Append the color name from thecolorapi.com
  WL_COLOR_PICKER_<KEY>           Override any config file key
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"wl-color-picker {__version__}",
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to config file (default: platform config dir)",
    )

    # Introspection
    parser.add_argument(
        "--print-defaults",
        action="store_true",
        help="Print default configuration as JSON and exit",
    )
    parser.add_argument(
        "--print-config-schema",
        action="store_true",
        help="Print configuration schema as JSON and exit",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration file and exit",
    )
    parser.add_argument(
        "--print-resolved",
        action="store_true",
        help="Print resolved configuration as JSON and exit",
    )

    # Output options
    parser.add_argument(
        "--dest",
        metavar="DEST",
        help="Output destination: comma-separated list of 'stdout' and/or 'clipboard' (default: stdout)",
    )
    parser.add_argument(
        "-c", "--copy",
        dest="dest",
        action="store_const",
        const="stdout,clipboard",
        help="Also copy to clipboard (equivalent to --dest stdout,clipboard)",
    )

    # Behavior options
    parser.add_argument(
        "--picker",
        action="store_true",
        default=None,
        help="Show color picker dialog to adjust color before output",
    )
    parser.add_argument(
        "--notify",
        dest="notify",
        action="store_true",
        default=None,
        help="Show system notification with the color",
    )
    parser.add_argument(
        "--no-notify",
        dest="notify",
        action="store_false",
        default=None,
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--delay",
        metavar="SECONDS",
        help="Delay in seconds before capturing (default: 1)",
    )

    # Debug
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def build_overrides(args: argparse.Namespace) -> dict:
    """Turn parsed arguments into config overrides.

    Raises:
        ConfigError: If --delay is not a valid number
    """
    overrides = {
        "dest": args.dest,
        "picker": args.picker,
        "notify": args.notify,
    }
    if args.delay is not None:
        try:
            overrides["delay"] = parse_delay(args.delay)
        except ConfigError:
            raise ConfigError("--delay must be a valid number")
    return overrides


def _config_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.config).expanduser() if args.config else None


def _emit_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _handle_introspection(args: argparse.Namespace) -> Optional[int]:
    config_path = _config_path(args)

    if args.print_defaults:
        _emit_json(config_defaults())
        return 0

    if args.print_config_schema:
        _emit_json(config_schema())
        return 0

    if args.validate_config:
        try:
            errors = validate_config_file(config_path)
        except ValueError as e:
            errors = [str(e)]
        if errors:
            for error in errors:
                print(error, file=sys.stderr)
            return 1
        return 0

    if args.print_resolved:
        try:
            config = load_config(config_path=config_path, overrides=build_overrides(args))
        except ConfigError as e:
            print(e, file=sys.stderr)
            return 1
        _emit_json(config_to_dict(config))
        return 0

    return None


def _finish(outcome: Outcome) -> int:
    """Exit code for a step that did not succeed."""
    if outcome.status is Status.CANCELLED:
        return 0
    log.error("%s", outcome.reason)
    return 1


def handle_pick(config: Config) -> int:
    """Pick a color and write it to the configured destinations."""
    try:
        check_environment(config)
    except EnvironmentCheckError as e:
        log.error("%s", e)
        if config.notify:
            try:
                show_notification(e.summary, e.body)
            except NotificationError as ne:
                log.debug("%s", ne)
        return 1

    converter = detect_converter(config)

    outcome = select_region(config)
    if not outcome.ok:
        return _finish(outcome)

    # grim returns the overlay's color if the capture runs before slurp's
    # selection surface is gone
    time.sleep(config.delay)

    outcome = grab_color(outcome.value, converter, config)
    if not outcome.ok:
        return _finish(outcome)
    color = outcome.value

    if config.picker:
        outcome = adjust_color(color, config)
        if not outcome.ok:
            return _finish(outcome)
        color = outcome.value

    result = annotate(PickResult(color), config)
    text = str(result)

    try:
        write_color(text, config.destinations, config)
        if config.notify:
            notify_picked(text, config.destinations)
    except (ConfigError, OutputError, NotificationError) as e:
        log.error("%s", e)
        return 1

    return 0


def main(args: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    argv = sys.argv[1:] if args is None else list(args)

    parser = create_argument_parser()
    parsed_args, unknown = parser.parse_known_args(normalize_args(argv))

    # Introspection flags short-circuit normal execution
    result = _handle_introspection(parsed_args)
    if result is not None:
        return result

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if parsed_args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if unknown:
        log.debug("Ignoring unknown arguments: %s", " ".join(unknown))

    try:
        config = load_config(
            config_path=_config_path(parsed_args),
            overrides=build_overrides(parsed_args),
        )
    except ConfigError as e:
        log.error("%s", e)
        return 1

    return handle_pick(config)


if __name__ == "__main__":
    sys.exit(main())

"""
CLI command entry points for redirect_scanner.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import sys

from pydantic import ValidationError

from redirect_scanner.cli.logging import print_header, setup_logging
from redirect_scanner.config import Settings
from redirect_scanner.constants import NAVIGATORS
from redirect_scanner.errors import InputReadError, ReportWriteError
from redirect_scanner.scan import run_scan


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for check-redirects."""
    parser = argparse.ArgumentParser(
        prog="check-redirects",
        description="Probe domains for redirects and group notable ones by destination host",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-l", "--list", dest="input_file", help="Input file with list of subdomains"
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        default=None,
        help="Output file to save redirected subdomains (default: redirects.txt)",
    )
    parser.add_argument(
        "-c", "--concurrency", type=int, default=None, help="Probes in flight (default: 5)"
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help="Hard deadline per navigation in seconds (default: 15)",
    )
    parser.add_argument(
        "--settle-delay",
        type=float,
        default=None,
        help="Seconds to wait for client-side redirects (default: 4)",
    )
    parser.add_argument(
        "--navigator",
        choices=NAVIGATORS,
        default=None,
        help="Navigation engine (default: browser)",
    )
    parser.add_argument(
        "--same-site-safe",
        action="store_true",
        default=None,
        help="Treat redirects inside the same registrable domain as safe",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("--log-file", action="store_true", help="Also write a DEBUG log to logs/")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings from env/.env, overridden by the flags that were given."""
    overrides = {
        "output_file": args.output_file,
        "max_concurrency": args.concurrency,
        "probe_timeout": args.timeout,
        "settle_delay": args.settle_delay,
        "navigator": args.navigator,
        "same_site_is_safe": args.same_site_safe,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> int:
    """
    Run a redirect scan.

    Returns:
        Process exit status (0 ok, 1 input/output failure; usage errors exit 2)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input_file:
        parser.error("[-] Please provide an input file with -l flag")

    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        parser.error(f"invalid settings: {e}")

    logger = setup_logging(
        "check_redirects",
        log_to_file=args.log_file,
        log_dir=settings.log_dir,
        verbose=args.verbose,
    )

    print_header("🔍 Checking redirect chains...", logger)
    logger.info(
        f"navigator={settings.navigator} concurrency={settings.max_concurrency} "
        f"timeout={settings.probe_timeout:g}s settle={settings.settle_delay:g}s"
    )

    try:
        report = run_scan(
            args.input_file,
            settings.output_file,
            settings=settings,
            show_progress=not args.no_progress,
        )
    except InputReadError as e:
        logger.error(f"[-] Error reading file: {e}")
        return 1
    except ReportWriteError as e:
        logger.error(f"[-] Failed to write output file: {e}")
        return 1

    logger.info(f"Summary: {report.stats.summary()}")
    logger.info(
        f"✅ Done. {len(report.grouped)} destination hosts, "
        f"{report.notable_count} redirecting domains saved to {report.output_path}"
    )
    return 0


def run_check_redirects():
    """Entry point for check-redirects command."""
    sys.exit(main())

"""Command line interface for teknify."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .models import DEFAULT_ENDPOINT, OutputMode, UploadConfig
from .orchestrator import default_concurrency, run_batch
from .presenter import OutputPresenter


ENDPOINT_ENV = "TEKNIFY_UPLOAD_URL"
TIMEOUT_ENV = "TEKNIFY_TIMEOUT"


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level (or LOG_LEVEL)
    is provided. Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    env_level = os.getenv("LOG_LEVEL")
    if not debug and not log_level and not env_level:
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, (log_level or env_level).upper(), logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


ENV_FILE_NAME = ".env"
USER_ENV_FILE = Path("~/.config/teknify/env")


def _parse_env_value(raw: str) -> str:
    """Unquote a value; unquoted values may carry a trailing `` # comment``."""
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"'}:
        return raw[1:-1]
    return raw.split(" #", 1)[0].rstrip()


def _read_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines; malformed lines are reported with their line number."""
    if not path.is_file():
        raise CLIError(f"env file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    values: Dict[str, str] = {}
    for lineno, raw_line in enumerate(content.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise CLIError(f"{path}:{lineno}: expected KEY=VALUE, got {raw_line.strip()!r}")
        values[key] = _parse_env_value(value)
    return values


def _apply_env_file(path: Path, override: bool = False) -> List[str]:
    """Export the file's settings into os.environ; returns the keys that were set."""
    applied = []
    for key, value in _read_env_file(path).items():
        if override or key not in os.environ:
            os.environ[key] = value
            applied.append(key)
    return applied


def _resolve_default_env_file() -> Optional[Path]:
    """``./.env`` wins over the per-user ``~/.config/teknify/env``."""
    for candidate in (Path(ENV_FILE_NAME), USER_ENV_FILE.expanduser()):
        if candidate.is_file():
            return candidate
    return None


def parse_concurrency(value: str) -> int:
    """argparse type for --concurrent: a positive integer of plain ASCII digits."""
    if not (value.isascii() and value.isdigit()):
        raise argparse.ArgumentTypeError("CONCURRENT UPLOADS must be a positive integer")
    count = int(value)
    if count == 0:
        raise argparse.ArgumentTypeError("CONCURRENT UPLOADS cannot be zero")
    return count


def is_valid_concurrency(value: str) -> bool:
    try:
        parse_concurrency(value)
    except argparse.ArgumentTypeError:
        return False
    return True


def _resolve_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        timeout = float(value)
    except ValueError as exc:
        raise CLIError(f"timeout must be a number of seconds, got {value!r}") from exc
    if timeout <= 0:
        raise CLIError(f"timeout must be positive, got {value!r}")
    return timeout


def _unique_paths(files: Sequence[Path]) -> List[Path]:
    return list(dict.fromkeys(Path(f) for f in files))


def _build_config(args: argparse.Namespace) -> UploadConfig:
    if args.json:
        mode = OutputMode.JSON
    elif args.url:
        mode = OutputMode.URL_ONLY
    else:
        mode = OutputMode.NAME_AND_URL

    endpoint = args.endpoint or os.getenv(ENDPOINT_ENV) or DEFAULT_ENDPOINT
    timeout = _resolve_timeout(args.timeout if args.timeout is not None else os.getenv(TIMEOUT_ENV))

    files = _unique_paths(args.files)
    if len(files) != len(args.files):
        logging.getLogger(__name__).warning("Duplicate file arguments were ignored")

    return UploadConfig(
        files=tuple(files),
        concurrency=args.concurrent or default_concurrency(),
        verbose=args.verbose,
        output_mode=mode,
        endpoint=endpoint,
        timeout=timeout,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teknify",
        description="Uploads files to u.teknik.io",
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        metavar="file",
        help="The file(s) that you would like to upload",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print extra information")
    parser.add_argument(
        "-c",
        "--concurrent",
        type=parse_concurrency,
        default=None,
        metavar="CONCURRENT UPLOADS",
        help=(
            "Sets the number of concurrent uploads. The default is equal to "
            "the number of CPU processors of the current machine"
        ),
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output full JSON reply rather than just image URL",
    )
    output.add_argument(
        "-u",
        "--url",
        action="store_true",
        help="Output only the URL of each uploaded file",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help=f"Upload endpoint URL (default from {ENDPOINT_ENV} or {DEFAULT_ENDPOINT})",
    )
    parser.add_argument(
        "--timeout",
        default=None,
        help=f"Per-request timeout in seconds (default from {TIMEOUT_ENV}, or none)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"teknify {__version__}",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    applied: List[str] = []
    try:
        used_env_file = args.env_file or _resolve_default_env_file()
        if used_env_file is not None:
            applied = _apply_env_file(Path(used_env_file))

        _setup_logging(debug=args.debug, log_level=args.log_level)
        if used_env_file is not None:
            logging.getLogger(__name__).debug(f"Loaded {applied or 'no new settings'} from {used_env_file}")
        config = _build_config(args)
    except (CLIError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    presenter = OutputPresenter(verbose=config.verbose)
    presenter.render_configuration_summary(config)

    try:
        outcomes = asyncio.run(run_batch(config, presenter=presenter))
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130

    presenter.render_batch_summary(outcomes)
    return 0 if all(o.success for o in outcomes) else 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()

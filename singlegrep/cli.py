from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional

from .config import load_config
from .constants import TITLE
from .errors import ConfigError, GrepError
from .pipeline import run_grep
from .progress import ProgressReporter
from .report import NAMING_MODES, resolve_output_namer
from .util import clean_user_input, dumps_pretty


_LOG = logging.getLogger("singlegrep.cli")

InputFn = Callable[[str], str]


def prompt_user(message: str, *, input_fn: InputFn = input) -> str:
    """Ask one question on stdin and return the cleaned answer."""
    try:
        answer = input_fn(message)
    except EOFError as e:
        raise ConfigError(f"no input for prompt {message.strip()!r}") from e
    return clean_user_input(answer)


def _answer_or_prompt(given: Optional[str], message: str, input_fn: InputFn) -> str:
    if given is not None:
        return clean_user_input(given)
    return prompt_user(message, input_fn=input_fn)


def _cmd_run(args: argparse.Namespace, *, input_fn: InputFn = input) -> int:
    """Interactive grep run: setting JSON, data folder, output folder."""
    from .app_logging import init_app_logging

    init_app_logging(component="grep")
    print(TITLE)

    try:
        config_path = _answer_or_prompt(args.config, "Setting JSON: ", input_fn)
        config = load_config(config_path)
        _LOG.debug("Config = %s", config.describe())

        input_path = _answer_or_prompt(args.input, "Data Folder: ", input_fn)
        output_dir = _answer_or_prompt(args.output, "Output Folder: ", input_fn)

        result = run_grep(
            config,
            input_path,
            output_dir,
            config_path=config_path,
            namer=resolve_output_namer(str(args.naming), config),
            reporter=ProgressReporter(),
        )
    except GrepError as e:
        _LOG.error("Grep failed: %s", e)
        raise SystemExit(f"GREP FAILED: {e}") from e

    if args.json:
        print(dumps_pretty(result))
    return 0


def _cmd_show_config(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.path)
    except GrepError as e:
        raise SystemExit(f"GREP FAILED: {e}") from e

    if args.json:
        print(dumps_pretty(config.to_json_dict()))
    else:
        print(config.describe())
    return 0


def _add_run_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Setting JSON path (skips the 'Setting JSON' prompt).")
    p.add_argument("--input", default=None, help="Data folder or single data file (skips the 'Data Folder' prompt).")
    p.add_argument("--output", default=None, help="Output folder (skips the 'Output Folder' prompt).")
    p.add_argument(
        "--naming",
        choices=list(NAMING_MODES),
        default="auto",
        help="Report file name: OutputFileName from the setting, the setting file's base name, or auto (default).",
    )
    p.add_argument("--json", action="store_true", help="Emit a JSON summary on success.")


_COMMANDS = ("run", "show-config")
_TOP_LEVEL_FLAGS = ("-h", "--help", "--version")


def _default_to_run(argv: list[str]) -> list[str]:
    # A bare `singlegrep` (or one with only run options) is the interactive run.
    # Only the leading token can name a command; later ones are option values.
    if argv and (argv[0] in _COMMANDS or argv[0] in _TOP_LEVEL_FLAGS):
        return argv
    return ["run", *argv]


def main(argv: list[str] | None = None, *, input_fn: InputFn = input) -> int:
    from . import __version__

    p = argparse.ArgumentParser(
        prog="singlegrep",
        description="Single Grep (regex-select files, extract capture groups into a tab-separated report).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run a grep (prompts for anything not given on the command line).")
    _add_run_options(p_run)
    p_run.set_defaults(func=_cmd_run)

    p_show = sub.add_parser("show-config", help="Load a setting JSON and print how it was understood.")
    p_show.add_argument("path", help="Path to the setting JSON.")
    p_show.add_argument("--json", action="store_true", help="Emit JSON.")
    p_show.set_defaults(func=_cmd_show_config)

    args = p.parse_args(_default_to_run(list(sys.argv[1:] if argv is None else argv)))
    if args.func is _cmd_run:
        rv = _cmd_run(args, input_fn=input_fn)
    else:
        rv = args.func(args)
    if rv is None:
        return 0
    return int(rv)

#!/usr/bin/env python3
# main.py

import argparse
import sys

from realm_config.errors import FileIOError, RealmConfigError
from realm_config.logger import LOG_PHASE, log, set_level
from realm_config.merger import merge_config
from realm_config.settings import DEFAULT_COMBINED_FILE, RealmSettings
from realm_config.splitter import split_config

COMMANDS = ("split", "merge")

EXAMPLES = """\
commands:
  split [file]   split a combined JSON document into YAML section files
  merge [file]   merge the YAML section files back into a JSON document

examples:
  realm-config split                 split the default realm.json
  realm-config merge custom.json     merge the sections into custom.json
"""


class UsageError(Exception):
    """Bad command line; usage has already been printed."""


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage on stdout and raises UsageError instead of exiting."""

    def error(self, message):
        print(f"{self.prog}: {message}")
        self.print_help(sys.stdout)
        raise UsageError(message)


def build_parser():
    # no -h/--help: anything other than split/merge is a usage error (exit 1)
    parser = _UsageParser(
        prog="realm-config",
        description="Convert a realm.json document to and from a directory of per-section YAML files.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("command", nargs="?", help="split | merge")
    parser.add_argument("file", nargs="?", default=DEFAULT_COMBINED_FILE,
                        help=f"Combined JSON document (default: {DEFAULT_COMBINED_FILE})")
    parser.add_argument("--config-dir", default=None,
                        help="Section directory (default: $REALM_CONFIG_DIR or realm_configs)")
    parser.add_argument("--numeric-order", action="store_true",
                        help="merge: order endpoint files by their numeric position instead of by name")
    parser.add_argument("--quiet", action="store_true", help="Only print warnings and errors")
    return parser


def _report(err):
    """Print a failure on stderr; falls back to a bare print when the log file itself is the problem."""
    if getattr(err, "phase", None) == LOG_PHASE:
        print(f"Error: {err}", file=sys.stderr)
        return
    try:
        log(f"Error: {err}", "ERROR")
    except FileIOError as log_err:
        print(f"Error: {log_err}", file=sys.stderr)


def main(argv=None):
    """
    CLI entrypoint.

    Usage:
      realm-config split [file] [--config-dir DIR]
      realm-config merge [file] [--config-dir DIR] [--numeric-order]

    Returns:
      int: 0 on success; 1 on usage errors (help on stdout) or operational
           failures (error on stderr).
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        return 1

    command = (args.command or "").lower()
    if command not in COMMANDS:
        if args.command:
            print(f"Unknown command: {args.command}")
        parser.print_help(sys.stdout)
        return 1

    if args.quiet:
        set_level("WARN")

    settings = RealmSettings.from_env(args.config_dir)
    try:
        if command == "split":
            split_config(args.file, settings)
        else:
            merge_config(args.file, settings, order="numeric" if args.numeric_order else "lexical")
    except RealmConfigError as e:
        _report(e)
        return 1
    finally:
        if args.quiet:
            set_level("INFO")
    return 0


if __name__ == "__main__":
    sys.exit(main())

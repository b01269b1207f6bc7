"""Example command-line front end for confee.

Usage:
    confee example.conf                    # print log/dir/addr/port report
    confee example.conf --delim =          # parse KEY=VALUE files
    confee example.conf --get port --type int
    CONFEE_FILE=example.conf confee        # source file from the environment
"""

import argparse
import os
import sys
from pathlib import Path

from confee.core.action_logging import make_update_log
from confee.core.converters import parse_addr, parse_bool, parse_port, parse_socket_addr
from confee.core.errors import ConfError
from confee.core.store import Conf
from confee.core.tokenizer import DEFAULT_DELIM

SOURCE_ENV_VAR = "CONFEE_FILE"

DEFAULTS = [
    ("log", "stdout"),
    ("dir", "/var/www/html/"),
    ("addr", "127.0.0.1"),
    ("port", "8080"),
]

CONVERTERS = {
    "str": str,
    "int": int,
    "float": float,
    "bool": parse_bool,
    "path": Path,
    "addr": parse_addr,
    "port": parse_port,
    "socket": parse_socket_addr,
}


def resolve_source(cli_path, *env_names):
    """Return the source path from the CLI argument or the first set env var."""
    if cli_path:
        return cli_path
    for name in env_names:
        value = (os.environ.get(name) or "").strip()
        if value:
            return value
    return None


def parse_assignment(text):
    """Parse a ``KEY=VALUE`` ``--set`` argument."""
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key.strip(), value.strip()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="confee",
        description="Load a key/value configuration file over defaults and print typed values",
    )
    parser.add_argument("file", nargs="?", default=None,
                        help=f"Configuration file (default: ${SOURCE_ENV_VAR})")
    parser.add_argument("--delim", "-d", default=DEFAULT_DELIM,
                        help=f"Key/value delimiter (default: {DEFAULT_DELIM!r})")
    parser.add_argument("--set", dest="overrides", action="append", default=[],
                        type=parse_assignment, metavar="KEY=VALUE",
                        help="Add or replace a default before the file is applied")
    parser.add_argument("--get", dest="key", default=None,
                        help="Print only this key")
    parser.add_argument("--type", dest="type_name", choices=sorted(CONVERTERS), default="str",
                        help="Conversion used with --get (default: str)")
    parser.add_argument("--log-file", default=None,
                        help="Append update events to this log file")
    return parser


def print_report(conf):
    """Print the example report and the store's display form."""
    dir_path = conf.get("dir", Path)
    addr = conf.get_addr("addr")
    port = conf.get("port", parse_port)
    print(f"log:  {conf['log']}")
    print(f"dir:  {dir_path}")
    print(f"addr: {addr}")
    print(f"port: {port}")
    print()
    print(conf, end="")


def main(argv=None):
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    source = resolve_source(args.file, SOURCE_ENV_VAR)
    if source is None:
        parser.error(f"no configuration file given and ${SOURCE_ENV_VAR} is not set")

    log_update = make_update_log(Path(args.log_file)) if args.log_file else None
    try:
        conf = Conf(DEFAULTS + args.overrides, delim=args.delim, log_update=log_update)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        conf.with_source(source).update()
    except (ConfError, OSError, UnicodeDecodeError) as exc:
        print(f"confee: {exc}", file=sys.stderr)
        return 1
    print("Successfully updated configuration!")

    try:
        if args.key is not None:
            print(conf.get(args.key, CONVERTERS[args.type_name]))
        else:
            print_report(conf)
    except ConfError as exc:
        if log_update is not None:
            log_update("get", source=source, error=exc)
        print(f"confee: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
CLI main entry point.
"""

import argparse
import json
import logging
import os
import stat
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, TextIO
from urllib.parse import urlsplit, urlunsplit

import requests

from .. import __version__
from ..config import (
    DEFAULT_CONFIG_PATH,
    ConfigValidationError,
    InuConfig,
    create_default_config,
    load_config,
)
from ..dogbin_client import DogbinClient, DogbinError, ServerConfig, ServerURLs

logger = logging.getLogger(__name__)

COMMANDS = ("put", "get", "init")
COMMAND_ALIASES = {
    "up": "put",
    "p": "put",
    "u": "put",
    "show": "get",
    "s": "get",
}
# Options that consume the next argument
OPTIONS_WITH_VALUE = (
    "-r", "--server", "-k", "--key", "-c", "--config", "--timeout",
    "-s", "--slug", "-f", "--file",
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _common_options() -> argparse.ArgumentParser:
    """Options shared by every command."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "-r",
        "--server",
        type=str,
        default=None,
        help="The dogbin/hastebin server to use (default: del.dog, env: DOGBIN_SERVER)",
    )
    parent.add_argument(
        "-k",
        "--key",
        type=str,
        default=None,
        help="The dogbin api key to use (env: DOGBIN_KEY)",
    )
    parent.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parent.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (env: DOGBIN_TIMEOUT)",
    )
    parent.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Outputs the result as JSON",
    )
    parent.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parent


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="inu",
        description="Use dogbin/hastebin right from your terminal",
        epilog="Without a command, 'put' is assumed.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s v{__version__}")

    common = _common_options()
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # put command
    put_parser = subparsers.add_parser(
        "put",
        aliases=["up", "p", "u"],
        parents=[common],
        help="Create a new paste",
        description="Create a new paste from stdin, a file, or the command line",
    )
    put_parser.add_argument(
        "-s",
        "--slug",
        type=str,
        default="",
        help="The slug to use instead of the server generated one [haste doesn't support this]",
    )
    put_parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="A file to upload",
    )
    put_parser.add_argument(
        "args",
        nargs="*",
        metavar="ARG",
        help="[slug] content: content to upload, optionally preceded by a slug",
    )

    # get command
    get_parser = subparsers.add_parser(
        "get",
        aliases=["show", "s"],
        parents=[common],
        help="Obtains the contents of a paste",
    )
    get_parser.add_argument(
        "-s",
        "--slug",
        dest="slug_option",
        type=str,
        default="",
        help="The slug of the paste to retrieve",
    )
    get_parser.add_argument(
        "reference",
        nargs="?",
        default="",
        help="Slug or URL of the paste (e.g. del.dog/abc.py)",
    )
    get_parser.set_defaults(print_command_help=get_parser.print_help)

    # init command
    subparsers.add_parser(
        "init",
        parents=[common],
        help="Write a default config file",
    )

    return parser


def _stdin_is_piped(stdin: TextIO) -> bool:
    """True when stdin is a pipe or a redirected file rather than a terminal."""
    try:
        mode = os.fstat(stdin.fileno()).st_mode
    except (OSError, ValueError):
        return False
    return stat.S_ISFIFO(mode) or stat.S_ISREG(mode)


def parse_paste_reference(reference: str, server: str) -> tuple[str, str]:
    """
    Split a paste reference into (slug, server).

    Accepts a plain slug ("abc"), a slug with extension ("abc.py"), or a paste
    URL with or without scheme ("del.dog/abc.py"). The server is only replaced
    when the reference names one.
    """
    slug = reference

    if "/" in slug:
        candidate = slug
        if not candidate.startswith("http") and not candidate.startswith("/"):
            candidate = f"https://{candidate}"
        try:
            parts = urlsplit(candidate)
        except ValueError:
            logger.debug(f"Could not parse '{reference}' as URL, using it as slug")
        else:
            slug = parts.path[1:]
            url_server = urlunsplit((parts.scheme, parts.netloc, "", "", ""))
            if url_server:
                server = url_server

    if "." in slug:
        slug = slug.split(".", 1)[0]

    return slug, server


def _split_put_args(
    args: list[str], slug: str, content_from_input: bool
) -> tuple[str, Optional[str]]:
    """Resolve (slug, content) from positional arguments.

    With stdin or file input a single argument is the slug; otherwise one
    argument is the content and two are slug and content.
    """
    if len(args) > 2:
        raise ValueError(f"expected at most 2 arguments, got {len(args)}")

    if content_from_input:
        if len(args) == 2:
            raise ValueError("content was already given via stdin or --file")
        if len(args) == 1:
            slug = args[0]
        return slug, None

    if len(args) == 1:
        return slug, args[0]
    if len(args) == 2:
        return args[0], args[1]
    return slug, ""


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2))


def cmd_put(
    config: InuConfig,
    slug: str,
    args: list[str],
    file: Optional[Path] = None,
    json_output: bool = False,
    stdin_content: Optional[str] = None,
) -> int:
    """Create a new paste and print its URL."""
    if stdin_content is not None:
        slug, _ = _split_put_args(args, slug, content_from_input=True)
        content = stdin_content
    elif file is not None:
        slug, _ = _split_put_args(args, slug, content_from_input=True)
        content = file.read_text(encoding="utf-8")
    else:
        slug, content = _split_put_args(args, slug, content_from_input=False)

    with DogbinClient.from_config(config.server, timeout=config.timeout) as client:
        result = client.put(slug, content)

    if json_output:
        _print_json(result.to_dict())
    else:
        print(result.url)
    return 0


def cmd_get(config: InuConfig, reference: str, json_output: bool = False) -> int:
    """Print the content of a paste."""
    slug, server = parse_paste_reference(reference, config.server.server)
    if not slug:
        print("Error: no slug given", file=sys.stderr)
        return 1

    if ServerURLs(server).base_url() != ServerURLs(config.server.server).base_url():
        # The API key belongs to the configured server only
        logger.debug(f"Not sending the API key to {server}")
        config = replace(config, server=ServerConfig(server=server))
    with DogbinClient.from_config(config.server, timeout=config.timeout) as client:
        document = client.get(slug)

    if json_output:
        _print_json(document.to_dict())
    else:
        print(document.content)
    return 0


def cmd_init(config_path: Path) -> int:
    """Write a default config file unless one exists."""
    path = config_path.expanduser()
    if path.exists():
        print(f"Error: {path} already exists", file=sys.stderr)
        return 1
    create_default_config(path)
    print(f"Wrote {path}")
    return 0


def _normalize_argv(argv: list[str]) -> list[str]:
    """
    Move the command to the front, inserting the default 'put' when none is given.

    Options may precede the command ("inu -r host get abc"), so leading
    options and their values are skipped before looking for it.
    """
    if argv and argv[0] in ("-h", "--help", "--version"):
        return argv

    index = 0
    while index < len(argv) and argv[index].startswith("-") and argv[index] != "--":
        index += 2 if argv[index] in OPTIONS_WITH_VALUE else 1

    if index < len(argv) and (argv[index] in COMMANDS or argv[index] in COMMAND_ALIASES):
        return [argv[index], *argv[:index], *argv[index + 1:]]
    return ["put", *argv]


def main(args: Optional[list[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if args is None else args
    parser = create_cli()
    parsed = parser.parse_args(_normalize_argv(list(argv)))

    setup_logging(parsed.verbose)

    command = COMMAND_ALIASES.get(parsed.command, parsed.command)

    if command == "init":
        return cmd_init(parsed.config or DEFAULT_CONFIG_PATH)

    # Load config
    try:
        config = load_config(parsed.config).with_overrides(
            server=parsed.server,
            api_key=parsed.key,
            timeout=parsed.timeout,
        )
    except ConfigValidationError as e:
        print(f"Error: failed to load config: {e}", file=sys.stderr)
        return 1

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    # Route to command
    try:
        if command == "put":
            stdin_content = sys.stdin.read() if _stdin_is_piped(sys.stdin) else None
            return cmd_put(
                config,
                parsed.slug,
                parsed.args,
                file=parsed.file,
                json_output=parsed.json,
                stdin_content=stdin_content,
            )
        elif command == "get":
            reference = parsed.reference or parsed.slug_option
            if not reference:
                parsed.print_command_help()
                return 1
            return cmd_get(config, reference, json_output=parsed.json)
    except (DogbinError, requests.exceptions.RequestException, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

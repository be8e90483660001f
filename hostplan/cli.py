"""Command-line entry point: resolve remotes and print the connection plan.

Environment (a `.env` file in the working directory is honoured):
- HOSTPLAN_CONFIG: YAML settings file (default ~/.config/hostplan/config.yaml)
- HOSTPLAN_SSH_CONFIG: SSH client config used for -s aliases
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Sequence

import weave
from dotenv import find_dotenv, load_dotenv

from hostplan.config import ConfigManager, SchemaError
from hostplan.errors import ValidationError
from hostplan.resolver import resolve
from hostplan.utils.types import RemoteResult, describe_plan

EPILOG = """\
Arguments are considered in a fixed order: bookmarks, then SSH aliases, then
positional arguments. The last of them is treated as the local starting
directory if it exists on disk, even when it was given as a bookmark or an
alias. With two remotes the first one is the target and the second one the
bridge host. Passwords pair with arguments in that same order.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostplan",
        description="Resolve remote addresses, bookmarks and SSH aliases into a connection plan.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "positional",
        nargs="*",
        metavar="ADDRESS|DIR",
        help="[protocol://][user@]address[:port][:path], or a local directory given last",
    )
    parser.add_argument(
        "-b", "--bookmark", action="append", default=[], metavar="NAME",
        help="connect to a saved bookmark (repeatable)",
    )
    parser.add_argument(
        "-s", "--ssh-host", action="append", default=[], metavar="ALIAS[:PATH]",
        help="connect to a Host alias from the SSH config (repeatable)",
    )
    parser.add_argument(
        "-P", "--password", action="append", default=[], metavar="PASSWORD",
        help="password for the remote in the same position (repeatable)",
    )
    parser.add_argument("-F", "--ssh-config", metavar="FILE", help="SSH client config file")
    parser.add_argument("-c", "--config", metavar="FILE", help="hostplan YAML settings file")
    parser.add_argument("--weave-project", metavar="PROJECT", help="trace resolution to a weave project")
    parser.add_argument("--json", action="store_true", help="print the plan as JSON")
    return parser


def _format_remote(remote: RemoteResult | None) -> str:
    if remote is None:
        return "-"
    if remote["kind"] == "bookmark":
        text = f"bookmark '{remote['name']}'"
    else:
        user = f"{remote['username']}@" if remote.get("username") else ""
        text = f"{remote['protocol']}://{user}{remote['address']}:{remote['port']}"
        if remote.get("remote_path"):
            text += f" {remote['remote_path']}"
    if remote.get("password"):
        text += f" (password: {remote['password']})"
    return text


def run(argv: Sequence[str] | None = None) -> int:
    """Parse `argv`, resolve the plan and print it.

    Returns:
        Process exit status: 0 on success, 1 on a resolution error,
        2 on a configuration error.
    """
    args = build_parser().parse_intermixed_args(argv)

    config_file = args.config or os.getenv("HOSTPLAN_CONFIG")
    try:
        config = ConfigManager(config_file, required=bool(config_file))
    except SchemaError as e:
        print(f"hostplan: invalid configuration: {e}", file=sys.stderr)
        return 2

    project = args.weave_project or config.weave_project
    if project:
        weave.init(project)

    ssh_config_path = config.ssh_config_path(args.ssh_config or os.getenv("HOSTPLAN_SSH_CONFIG"))
    try:
        plan = resolve(
            args.bookmark,
            args.ssh_host,
            args.positional,
            args.password,
            ssh_config_path=ssh_config_path,
            default_protocol=config.default_protocol,
        )
    except ValidationError as e:
        print(f"hostplan: {e}", file=sys.stderr)
        return 1

    result = describe_plan(plan)
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"target:    {_format_remote(result['target'])}")
        print(f"bridge:    {_format_remote(result['bridge'])}")
        print(f"local dir: {result['local_dir'] or '-'}")
    return 0


def main() -> None:
    load_dotenv(find_dotenv(usecwd=True))
    sys.exit(run())

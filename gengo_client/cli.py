"""Command-line interface for quick Gengo API lookups.

WHY: Checking a balance, a job's status, or the supported language pairs
should not require writing a script. The CLI wires the client to a few
read-only commands and prints the result as JSON.

HOW: Uses argparse subcommands, one per lookup. Keys come from the
environment (.env) via GengoClient defaults. The async call runs via
asyncio.run(). Results go to stdout as JSON; status and errors go to
stderr.

RULES:
- Only read operations are exposed; nothing here changes account state
- --sandbox / --no-sandbox pick the endpoint, --base-url overrides both
- Exit code 1 on Gengo errors, validation errors, and transport errors
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional

import httpx

from gengo_client.api.client import GengoClient
from gengo_client.config import ClientMode
from gengo_client.errors import GengoAPIError, GengoValidationError


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _to_jsonable(value: Any) -> Any:
    """Turn payload dataclasses (and lists/dicts of them) into plain JSON data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _print_result(result: Any) -> None:
    print(json.dumps(_to_jsonable(result), indent=2, default=str, ensure_ascii=False))


async def _dispatch(client: GengoClient, args: argparse.Namespace) -> Any:
    """Run the API call selected by args.command."""
    command = args.command
    if command == "balance":
        return await client.account.get_balance()
    if command == "stats":
        return await client.account.get_stats()
    if command == "me":
        return await client.account.get_me()
    if command == "languages":
        return await client.service.get_languages()
    if command == "language-pairs":
        return await client.service.get_language_pairs(args.source)
    if command == "job":
        return await client.job.get(args.job_id, include_machine_translation=args.mt)
    if command == "job-comments":
        return await client.job.get_comments(args.job_id)
    if command == "job-revisions":
        return await client.job.get_revisions(args.job_id)
    if command == "recent-jobs":
        return await client.jobs.get_recent(status=args.status, count=args.count)
    if command == "order":
        return await client.order.get(args.order_id)
    raise GengoValidationError("Unknown command {!r}".format(command))


async def _run(args: argparse.Namespace) -> Any:
    mode = None
    if args.sandbox is not None:
        mode = ClientMode.SANDBOX if args.sandbox else ClientMode.PRODUCTION
    async with GengoClient(mode=mode, base_url=args.base_url) as client:
        _status("Calling {} ...".format(client.base_url))
        return await _dispatch(client, args)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - One subcommand per lookup; ids are positional ints
    - --sandbox/--no-sandbox unset means "use GENGO_BASE_URL or GENGO_MODE"
    """
    parser = argparse.ArgumentParser(
        prog="gengo_client",
        description="Query the Gengo translation API and print the result as JSON.",
    )
    parser.add_argument(
        "--sandbox",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use the sandbox (or, with --no-sandbox, production) endpoint. "
             "Default: GENGO_BASE_URL, else GENGO_MODE, from the environment.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Explicit API base URL; overrides --sandbox.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each request to stderr.",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("balance", help="Account credit balance.")
    sub.add_parser("stats", help="Account statistics.")
    sub.add_parser("me", help="Account profile.")
    sub.add_parser("languages", help="Supported languages.")

    pairs = sub.add_parser("language-pairs", help="Supported language pairs and prices.")
    pairs.add_argument("--source", default=None, help="Only pairs from this source language code.")

    job = sub.add_parser("job", help="Show one job.")
    job.add_argument("job_id", type=int)
    job.add_argument("--mt", action="store_true", help="Include a machine translation preview.")

    comments = sub.add_parser("job-comments", help="Comment thread of a job.")
    comments.add_argument("job_id", type=int)

    revisions = sub.add_parser("job-revisions", help="Revision ids of a job.")
    revisions.add_argument("job_id", type=int)

    recent = sub.add_parser("recent-jobs", help="Recently submitted job ids.")
    recent.add_argument("--status", default=None, help="Only jobs in this state.")
    recent.add_argument("--count", type=int, default=None, help="Maximum number of ids.")

    order = sub.add_parser("order", help="Show one order.")
    order.add_argument("order_id", type=int)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m gengo_client`` and the ``gengo`` script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        result = asyncio.run(_run(args))
    except GengoAPIError as e:
        _status("Gengo error {}: {}".format(e.code, e.message))
        sys.exit(1)
    except GengoValidationError as e:
        _status("Error: {}".format(e))
        sys.exit(1)
    except httpx.HTTPError as e:
        _status("Network error: {}".format(e))
        sys.exit(1)

    _print_result(result)


if __name__ == "__main__":
    main()

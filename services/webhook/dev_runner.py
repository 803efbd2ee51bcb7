#!/usr/bin/env python3
"""
Development runner for the webhook job.

Runs the handlers locally the way the job runner would: invoke, and on
failure the error handler with the raised exception. ``--halt`` runs the
halt handler instead.
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from services.webhook import handler
from services.webhook.core.logging_config import setup_logging

SEPARATOR = "=" * 50


def _key_value_pairs(values: Optional[List[str]], option: str) -> Dict[str, str]:
    pairs = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"{option} expects KEY=VALUE, got: {item}")
        pairs[key] = value
    return pairs


def _mask(secrets: Dict[str, str]) -> Dict[str, str]:
    return {key: (value[:4] + "***" if len(value) > 4 else "***") for key, value in secrets.items()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the generic webhook job locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--method", "-X", default="POST", help="HTTP method (default: POST)")
    parser.add_argument("--address", "-a", help="Target URL (default: WEBHOOK_BASE_URL)")
    parser.add_argument("--suffix", help="Path appended to the address")
    parser.add_argument("--body", "-d", help="JSON request body")
    parser.add_argument("--headers", "-H", help="JSON object of extra request headers")
    parser.add_argument(
        "--accept",
        type=int,
        action="append",
        default=[],
        metavar="CODE",
        help="Additional status code treated as success (repeatable)",
    )
    parser.add_argument(
        "--secret", action="append", metavar="KEY=VALUE", help="Context secret (repeatable)"
    )
    parser.add_argument(
        "--env", action="append", metavar="KEY=VALUE", help="Context env entry (repeatable)"
    )
    parser.add_argument(
        "--partial",
        action="append",
        metavar="KEY=VALUE",
        help="Context partial result (repeatable)",
    )
    parser.add_argument("--halt", metavar="REASON", help="Run the halt handler with REASON")
    return parser


def build_job_input(args: argparse.Namespace):
    params: Dict[str, Any] = {"method": args.method}
    if args.address:
        params["address"] = args.address
    if args.suffix:
        params["addressSuffix"] = args.suffix
    if args.body:
        params["requestBody"] = args.body
    if args.headers:
        params["requestHeaders"] = args.headers
    if args.accept:
        params["acceptedStatusCodes"] = args.accept

    context = {
        "env": {"ENVIRONMENT": "development", **_key_value_pairs(args.env, "--env")},
        "secrets": _key_value_pairs(args.secret, "--secret"),
        "outputs": {},
        "partial_results": _key_value_pairs(args.partial, "--partial"),
    }
    return params, context


def _print_json(label: str, data: Any) -> None:
    print(f"{label} {json.dumps(data, indent=2, default=str)}")


async def run(
    params: Dict[str, Any], context: Dict[str, Any], halt_reason: Optional[str] = None
) -> int:
    print("Running webhook job in development mode...\n")
    _print_json("Parameters:", params)
    _print_json("Context:", {**context, "secrets": _mask(context["secrets"])})
    print("\n" + SEPARATOR + "\n")

    if halt_reason:
        result = await handler.halt({**params, "reason": halt_reason}, context)
        _print_json("Halt result:", result)
        return 0

    try:
        result = await handler.invoke(params, context)
    except Exception as e:
        print("\n" + SEPARATOR)
        print(f"Job failed: {e}")
        print("\nAttempting error recovery...")
        try:
            recovery = await handler.error({**params, "error": e}, context)
        except Exception as recovery_error:
            print(f"Recovery failed: {recovery_error}")
            return 1
        print("Recovery successful!")
        _print_json("Recovery result:", recovery)
        return 0

    print("\n" + SEPARATOR)
    print(f"Job completed with status {result['status']}")
    _print_json("Result:", result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        params, context = build_job_input(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    setup_logging()
    return asyncio.run(run(params, context, halt_reason=args.halt))


if __name__ == "__main__":
    sys.exit(main())

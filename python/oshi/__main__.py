import argparse
import asyncio
import os
import sys

import structlog
from dotenv import find_dotenv, load_dotenv

from . import __version__
from .client import OshiClient
from .config import DEFAULT_ENDPOINT, OshiConfig
from .errors import OshiError
from .logs import setup_logging
from .types import Image
from .urls import extract_file_id

logger = structlog.get_logger("oshi.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oshi", description="oshi.at file hosting client.")
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Show version and exit.",
    )
    parser.add_argument(
        "--endpoint",
        dest="endpoint",
        type=str,
        default=None,
        help=f"Service base URL. Defaults to OSHI_ENDPOINT or {DEFAULT_ENDPOINT}.",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        default=None,
        help="Request timeout in seconds.",
    )
    subparsers = parser.add_subparsers(dest="command")

    upload = subparsers.add_parser("upload", help="Upload a file.")
    upload.add_argument("path", type=str, help="Path to the file to upload.")
    upload.add_argument("--filename", dest="filename", type=str, default=None, help="Name to store the file under.")
    upload.add_argument("--expire", dest="expire", type=int, default=0, help="Days before the file expires.")
    upload.add_argument("--autodestroy", action="store_true", help="Delete the file after its first download.")
    upload.add_argument("--randomizefn", action="store_true", help="Randomize the stored filename.")
    upload.add_argument("--shorturl", action="store_true", help="Produce a shortened download URL.")

    hashsum = subparsers.add_parser("hashsum", help="Print the hashsum of an uploaded file.")
    hashsum.add_argument("file", type=str, help="File id or download URL.")

    delete = subparsers.add_parser("delete", help="Delete an uploaded file.")
    delete.add_argument("admin_url", type=str, help="Admin URL returned by the upload.")

    subparsers.add_parser("tor", help="Print the onion mirror hostname.")

    return parser


async def run(args: argparse.Namespace, client: OshiClient) -> list[str]:
    """Run a parsed command and return the lines to print."""
    if args.command == "upload":
        directives = {
            "expire": args.expire,
            "autodestroy": args.autodestroy,
            "randomizefn": args.randomizefn,
            "shorturl": args.shorturl,
        }
        if args.filename is not None:
            directives["filename"] = args.filename
        image = Image.from_path(args.path, **directives)
        result = await client.upload(image, timeout=args.timeout)
        lines = []
        if result.admin:
            lines.append(f"{result.admin} [Admin]")
        if result.download:
            lines.append(f"{result.download} [Download]")
        if result.tor_download:
            lines.append(f"{result.tor_download} [Tor download]")
        return lines

    if args.command == "hashsum":
        file_id = args.file
        if file_id.startswith(("http://", "https://")):
            file_id = extract_file_id(file_id)
        result = await client.get_hashsum(file_id, timeout=args.timeout)
        return [f"{result.hashsum} ({result.algorithm})"]

    if args.command == "delete":
        await client.delete(args.admin_url, timeout=args.timeout)
        return []

    if args.command == "tor":
        return [(await client.get_tor_endpoint(timeout=args.timeout)).strip()]

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args: argparse.Namespace) -> list[str]:
    config = OshiConfig(endpoint=args.endpoint or os.getenv("OSHI_ENDPOINT") or DEFAULT_ENDPOINT)
    async with OshiClient(config=config) as client:
        return await run(args, client)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"oshi {__version__}") # noqa: T201
        return 0

    if not args.command:
        parser.print_usage(sys.stderr)
        return 1

    load_dotenv(find_dotenv(usecwd=True))
    setup_logging()

    try:
        lines = asyncio.run(_main(args))
    except (OshiError, OSError, ValueError) as e:
        logger.debug("command_failed", command=args.command, exc_info=True)
        print(f"oshi: {e}", file=sys.stderr) # noqa: T201
        return 1

    for line in lines:
        print(line) # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entrypoint for PIN hashing."""

import argparse
import asyncio
import getpass
import sys

from pinhash.config import get_settings
from pinhash.errors import HashingError
from pinhash.services.credential_service import CredentialService
from pinhash.utils.logger import setup_logging
from pinhash.utils.security import PinHasher

EXIT_OK = 0
EXIT_NO = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pinhash", description="Argon2 PIN hashing and verification.")
    parser.add_argument("--stdin", action="store_true", help="read the PIN as one line from standard input")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("hash", help="print a new encoded hash for a PIN")

    verify = commands.add_parser("verify", help="exit 0 if the PIN matches, 1 otherwise")
    verify.add_argument("pin_hash")

    rehash = commands.add_parser("needs-rehash", help="exit 0 if the hash uses outdated parameters")
    rehash.add_argument("pin_hash")
    return parser


def read_pin(from_stdin: bool) -> str:
    """Read the PIN without exposing it on the command line."""

    if from_stdin:
        return sys.stdin.readline().rstrip("\r\n")
    return getpass.getpass("PIN: ")


async def main(argv: list[str] | None = None) -> int:
    """Run one command and return the process exit code."""

    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file_path, stream=sys.stderr)
    service = CredentialService(hasher=PinHasher.from_settings(settings))

    try:
        if args.command == "needs-rehash":
            return EXIT_OK if service.hasher.needs_rehash(args.pin_hash) else EXIT_NO

        pin = read_pin(args.stdin)
        if args.command == "hash":
            print(await service.hash(pin))
            return EXIT_OK

        ok = await service.verify(pin, args.pin_hash)
        return EXIT_OK if ok else EXIT_NO
    except HashingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()

"""Command-line interface for dgc-cose."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from . import __version__, edn_utils
from .certificates import compute_kid, load_certificate, load_private_key
from .cose_sign1 import Sign1Message
from .exceptions import CoseError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dgc-cose",
        description="Sign, verify and inspect COSE Sign1 messages (ES256 / PS256)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sign subcommand
    sign_parser = subparsers.add_parser("sign", help="Sign a payload into a COSE Sign1 message")
    sign_parser.add_argument("--payload", "-p", required=True, help="Payload file")
    sign_parser.add_argument("--key", "-k", required=True, help="EC or RSA private key (PEM or DER)")
    sign_parser.add_argument("--kid", required=True, help="Base64 key identifier")
    sign_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # Verify subcommand
    verify_parser = subparsers.add_parser("verify", help="Verify a COSE Sign1 message")
    verify_parser.add_argument("input", help="COSE Sign1 file to verify")
    verify_parser.add_argument("--cert", "-c", required=True, help="Signer certificate (PEM or DER)")

    # Dump subcommand
    dump_parser = subparsers.add_parser("dump", help="Show a COSE Sign1 message in diagnostic notation")
    dump_parser.add_argument("input", help="COSE Sign1 file")

    # Kid subcommand
    kid_parser = subparsers.add_parser("kid", help="Print the key identifier of a certificate")
    kid_parser.add_argument("cert", help="Certificate (PEM or DER)")

    return parser


def _write_output(data: bytes, output: Optional[str]) -> None:
    if output:
        Path(output).write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


def cmd_sign(args: argparse.Namespace) -> int:
    payload = Path(args.payload).read_bytes()
    private_key = load_private_key(Path(args.key).read_bytes())

    message = Sign1Message(payload)
    message.sign(private_key, args.kid)
    _write_output(message.encode(), args.output)
    logger.info("Signed %d byte payload with %s", len(payload), message.algorithm.name)
    return EXIT_OK


def cmd_verify(args: argparse.Namespace) -> int:
    certificate = load_certificate(Path(args.cert).read_bytes())
    message = Sign1Message.decode(Path(args.input).read_bytes())

    if message.verify(certificate):
        print(f"Signature valid (alg={message.algorithm.name}, kid={message.kid})")
        return EXIT_OK
    print(f"Signature INVALID (alg={message.algorithm.name}, kid={message.kid})")
    return EXIT_INVALID


def cmd_dump(args: argparse.Namespace) -> int:
    data = Path(args.input).read_bytes()
    message = Sign1Message.decode(data)
    print(edn_utils.cbor_to_diag(data))
    print(f"alg: {message.algorithm.name}")
    print(f"kid: {message.kid}")
    return EXIT_OK


def cmd_kid(args: argparse.Namespace) -> int:
    certificate = load_certificate(Path(args.cert).read_bytes())
    print(compute_kid(certificate))
    return EXIT_OK


COMMANDS = {
    "sign": cmd_sign,
    "verify": cmd_verify,
    "dump": cmd_dump,
    "kid": cmd_kid,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        return COMMANDS[args.command](args)
    except (CoseError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for the signature verification service.

Usage:
    python -m sigverify.cli verify --message TEXT --signature HEX [OPTIONS]
    python -m sigverify.cli serve [OPTIONS]

Examples:
    # Recover the signer of a signature
    python -m sigverify.cli verify --message "Hello, Web3!" --signature 0x5f3c...1b

    # Also report the syntactic format checks
    python -m sigverify.cli verify --message "Hello, Web3!" --signature 0x... --check-format

    # Run the HTTP API on a custom port with verbose logging
    python -m sigverify.cli -v serve --port 8080
"""

import json
import sys
from argparse import ArgumentParser, Namespace

import structlog
import uvicorn

from sigverify.core import timezone  # noqa: F401
from sigverify.core.config import Settings, configure_logging
from sigverify.services.signature_verifier import (
    is_valid_message,
    is_valid_signature_format,
    verify_signature,
)

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(
        prog="sigverify",
        description="Recover signer addresses from EIP-191 personal message signatures",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    verify_parser = subparsers.add_parser("verify", help="Verify a signature and print the result")
    verify_parser.add_argument("--message", required=True, help="Message that was signed")
    verify_parser.add_argument("--signature", required=True, help="Hex encoded signature")
    verify_parser.add_argument(
        "--type",
        dest="message_type",
        default=None,
        help="Signature scheme tag (informational)",
    )
    verify_parser.add_argument(
        "--check-format",
        action="store_true",
        help="Also report signature format and message validity checks",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PORT setting)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser.parse_args(argv)


def run_verify(args: Namespace) -> int:
    """Verify a signature and print the result as JSON.

    Returns:
        Exit code: 0 (signer recovered), 1 (signature did not recover)
    """
    result = verify_signature(args.message, args.signature, message_type=args.message_type)
    output = result.model_dump(by_alias=True)

    if args.check_format:
        output["signatureFormatValid"] = is_valid_signature_format(args.signature)
        output["messageValid"] = is_valid_message(args.message)

    print(json.dumps(output, ensure_ascii=False))
    return 0 if result.is_valid else 1


def run_serve(args: Namespace, settings: Settings) -> int:
    """Serve the API until interrupted."""
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info("cli.serve", host=host, port=port, reload=args.reload)
    uvicorn.run(
        "sigverify.app:app",
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Process exit code
    """
    args = parse_args(argv)

    settings = Settings()
    if args.verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)

    try:
        if args.command == "verify":
            return run_verify(args)
        return run_serve(args, settings)

    except KeyboardInterrupt:
        logger.info("cli.interrupted")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.error(
            "cli.unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        return 1

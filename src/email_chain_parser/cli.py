from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from email_chain_parser.config import get_settings
from email_chain_parser.services.chain_parser import parse_chain
from email_chain_parser.services.email_reader import EmailReadError, NO_SUBJECT, read_email
from email_chain_parser.services.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _load(path: Path, subject: str | None, raw_text: bool) -> tuple[str, str]:
    data = path.read_bytes()
    if raw_text or path.suffix.lower() == ".txt":
        return data.decode("utf-8", errors="replace"), subject or NO_SUBJECT
    parsed = read_email(data)
    return parsed.body_text, subject or parsed.subject


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Split an email thread into its individual messages.")
    parser.add_argument("path", type=Path, help="Path to an .eml message or a plain-text thread.")
    parser.add_argument("--subject", default=None, help="Override the thread subject.")
    parser.add_argument(
        "--raw-text",
        action="store_true",
        help="Treat the file as an already-decoded body instead of a MIME message.",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        body, subject = _load(args.path, args.subject, args.raw_text)
    except (OSError, EmailReadError) as exc:
        logger.error("Unable to read email file", extra={"event": "cli_read_failed", "path": str(args.path)})
        print(f"error: {exc}", file=sys.stderr)
        return 1

    chain = parse_chain(body, subject, options=settings.chain_options())
    print(json.dumps(chain.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from email_chain_parser.services.body_cleaner import clean_body
from email_chain_parser.services.extractors import UNKNOWN_SENDER, extract_date, extract_sender, utc_now
from email_chain_parser.services.patterns import (
    MIN_FALLBACK_SEGMENT_CHARS,
    QUOTE_STRIP_MIN_KEPT_LINES,
    QUOTE_STRIP_MIN_ORIGINAL_LINES,
)
from email_chain_parser.services.segmenter import segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainOptions:
    blank_line_min_segment_chars: int = MIN_FALLBACK_SEGMENT_CHARS
    quote_strip_min_kept_lines: int = QUOTE_STRIP_MIN_KEPT_LINES
    quote_strip_min_original_lines: int = QUOTE_STRIP_MIN_ORIGINAL_LINES


@dataclass(frozen=True)
class Message:
    sender: str
    date: str
    body: str
    order: int

    def to_dict(self) -> dict[str, Any]:
        return {"sender": self.sender, "date": self.date, "body": self.body, "order": self.order}


@dataclass(frozen=True)
class Chain:
    subject: str
    messages: tuple[Message, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"subject": self.subject, "messages": [message.to_dict() for message in self.messages]}


def parse_chain(body_text: str, subject: str, *, options: ChainOptions | None = None) -> Chain:
    """Split a raw email thread into messages, newest first.

    Never raises. A body with no recognizable reply boundary comes back as a
    single message with an unknown sender and the current time as its date.
    """
    opts = options or ChainOptions()
    text = body_text or ""

    segments = segment(text, min_fallback_chars=opts.blank_line_min_segment_chars)
    if len(segments) == 1:
        return Chain(
            subject=subject,
            messages=(Message(sender=UNKNOWN_SENDER, date=utc_now(), body=text.strip(), order=0),),
        )

    messages = tuple(
        Message(
            sender=extract_sender(part),
            date=extract_date(part),
            body=clean_body(
                part,
                min_kept_lines=opts.quote_strip_min_kept_lines,
                min_original_lines=opts.quote_strip_min_original_lines,
            ),
            order=index,
        )
        for index, part in enumerate(segments)
    )
    logger.debug("Parsed email chain", extra={"event": "chain_parsed", "messages": len(messages)})
    return Chain(subject=subject, messages=messages)

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from typing import Any

from email_chain_parser.services.extractors import UNKNOWN_SENDER, format_timestamp, utc_now

NO_SUBJECT = "No Subject"
NO_CONTENT = "No content"


class EmailReadError(ValueError):
    """Raised when uploaded bytes cannot be read as an email message."""


@dataclass(frozen=True)
class ParsedEmail:
    sender: str
    recipients: str
    cc: str
    bcc: str
    subject: str
    date: str
    text: str
    html: str
    message_id: str

    @property
    def body_text(self) -> str:
        if self.text.strip():
            return self.text
        if self.html.strip():
            return html_to_text(self.html)
        return NO_CONTENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender": self.sender,
            "recipients": self.recipients,
            "subject": self.subject,
            "date": self.date,
            "body": self.body_text,
            "cc": self.cc,
            "bcc": self.bcc,
            "messageId": self.message_id,
        }


def html_to_text(markup: str) -> str:
    text = re.sub(r"<(script|style)\b.*?</\1\s*>", "", markup or "", flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</(p|div|tr|li|blockquote)\s*>", "\n\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = re.sub(r"[ \t]+\n", "\n", text)
    return text.strip()


def format_addresses(header: Any) -> str:
    if header is None:
        return UNKNOWN_SENDER
    addresses = getattr(header, "addresses", None)
    if not addresses:
        value = str(header).strip()
        return value or UNKNOWN_SENDER

    formatted = []
    for address in addresses:
        if address.display_name:
            formatted.append(f"{address.display_name} <{address.addr_spec}>")
        else:
            formatted.append(address.addr_spec)
    return ", ".join(formatted)


def _header_date(message: EmailMessage) -> str:
    try:
        header = message["Date"]
        value = getattr(header, "datetime", None) if header is not None else None
    except (ValueError, TypeError):
        value = None
    if value is None:
        return utc_now()
    try:
        return format_timestamp(value)
    except (ValueError, OverflowError):
        return utc_now()


def _part_content(message: EmailMessage, subtype: str) -> str:
    part = message.get_body(preferencelist=(subtype,))
    if part is None:
        return ""
    return part.get_content()


def read_email(raw: bytes) -> ParsedEmail:
    if not raw or not raw.strip():
        raise EmailReadError("email file is empty")

    try:
        message = BytesParser(policy=policy.default).parsebytes(raw)
        text = _part_content(message, "plain")
        markup = _part_content(message, "html")
        sent_at = _header_date(message)
    except (LookupError, UnicodeError, ValueError, TypeError) as exc:
        raise EmailReadError(f"unable to read email content: {exc!r}") from exc

    subject = str(message["Subject"] or "").strip()
    return ParsedEmail(
        sender=format_addresses(message["From"]),
        recipients=format_addresses(message["To"]),
        cc=format_addresses(message["Cc"]),
        bcc=format_addresses(message["Bcc"]),
        subject=subject or NO_SUBJECT,
        date=sent_at,
        text=text,
        html=markup,
        message_id=str(message["Message-ID"] or "").strip(),
    )

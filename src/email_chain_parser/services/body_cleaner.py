from email_chain_parser.services.patterns import (
    LEADING_HEADER_BLOCK_RE,
    LEADING_ON_WROTE_RE,
    LEADING_RULE_RE,
    QUOTE_STRIP_MIN_KEPT_LINES,
    QUOTE_STRIP_MIN_ORIGINAL_LINES,
)


def strip_leading_headers(segment: str) -> str:
    cleaned = (segment or "").lstrip()
    cleaned = LEADING_ON_WROTE_RE.sub("", cleaned, count=1)
    cleaned = LEADING_HEADER_BLOCK_RE.sub("", cleaned, count=1)
    cleaned, rules = LEADING_RULE_RE.subn("", cleaned, count=1)
    if rules:
        # Outlook puts the From:/Sent: block under the rule.
        cleaned = LEADING_HEADER_BLOCK_RE.sub("", cleaned, count=1)
    return cleaned


def clean_body(
    segment: str,
    *,
    min_kept_lines: int = QUOTE_STRIP_MIN_KEPT_LINES,
    min_original_lines: int = QUOTE_STRIP_MIN_ORIGINAL_LINES,
) -> str:
    cleaned = strip_leading_headers(segment)

    lines = cleaned.split("\n")
    kept = [line for line in lines if not line.strip().startswith(">")]

    # Mostly-quoted message: keep the quotes rather than leave almost nothing.
    if len(kept) < min_kept_lines and len(lines) > min_original_lines:
        return cleaned.strip()

    return "\n".join(kept).strip()

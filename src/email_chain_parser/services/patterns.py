import re

MIN_FALLBACK_SEGMENT_CHARS = 20
QUOTE_STRIP_MIN_KEPT_LINES = 2
QUOTE_STRIP_MIN_ORIGINAL_LINES = 5

_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
_WEEKDAY = r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?"

# Boundaries. Lookahead splits keep the header with the message it introduces.
TOP_POST_SPLIT_RE = re.compile(
    r"(?=^[ \t]*On\s[^\r\n]*?\bat\s[^\r\n]*?(?:\r?\n[^\r\n]*?)?wrote:)",
    re.IGNORECASE | re.MULTILINE,
)
HEADER_BLOCK_SPLIT_RE = re.compile(
    r"(?=^[ \t]*From:[ \t]*\S[^\r\n]*(?:\r?\n[^\r\n]*)?\r?\n[ \t]*(?:Sent|Date):)",
    re.IGNORECASE | re.MULTILINE,
)
ORIGINAL_MESSAGE_RULE_RE = re.compile(r"[-_]{3,}\s*Original Message\s*[-_]{3,}", re.IGNORECASE)
BLANK_LINE_RUN_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n){2,}")

# Senders
NAME_EMAIL_RE = re.compile(
    r"(?:\"([^\"\r\n]+)\"|([^,:;<>\s\"][^,:;<>\r\n]*?))[ \t]*<([A-Z0-9._%+-]+@[A-Z0-9.-]+)>",
    re.IGNORECASE,
)
FROM_NAME_EMAIL_RE = re.compile(
    r"^[ \t>]*From:[ \t]*([^<>\r\n]*?)[ \t]*<([A-Z0-9._%+-]+@[A-Z0-9.-]+)>",
    re.IGNORECASE | re.MULTILINE,
)
FROM_LINE_RE = re.compile(r"^[ \t>]*From:[ \t]*(\S[^\r\n]*)", re.IGNORECASE | re.MULTILINE)
EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)

# Dates
ON_DATE_RE = re.compile(
    rf"\bOn\s+(?:{_WEEKDAY},?\s+)?({_MONTH}\s+\d{{1,2}},?\s+\d{{4}}[^,\r\n]*?\bat\b[^,<\r\n]+)",
    re.IGNORECASE,
)
SENT_DATE_RE = re.compile(r"^[ \t>]*(?:Sent|Date):[ \t]*(\S[^\r\n]*)", re.IGNORECASE | re.MULTILINE)

# Leading boilerplate, matched only at the start of a segment.
LEADING_ON_WROTE_RE = re.compile(r"\AOn\s[^\r\n]*?(?:\r?\n[^\r\n]*?)?wrote:\s*", re.IGNORECASE)
LEADING_HEADER_BLOCK_RE = re.compile(
    r"\AFrom:[^\r\n]*(?:\r?\n[^\r\n]*)?\r?\n[ \t]*(?:Sent|Date):[^\r\n]*"
    r"(?:\r?\n[ \t]*(?:To|Cc|Bcc|Subject):[^\r\n]*)*\s*",
    re.IGNORECASE,
)
LEADING_RULE_RE = re.compile(r"\A[-_]{3,}\s*Original Message\s*[-_]{3,}\s*", re.IGNORECASE)

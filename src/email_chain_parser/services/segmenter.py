import logging
import re
from dataclasses import dataclass

from email_chain_parser.services.patterns import (
    BLANK_LINE_RUN_RE,
    HEADER_BLOCK_SPLIT_RE,
    MIN_FALLBACK_SEGMENT_CHARS,
    ORIGINAL_MESSAGE_RULE_RE,
    TOP_POST_SPLIT_RE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundaryStrategy:
    """One boundary detector in the segmentation cascade.

    A split is usable when it yields at least two non-empty segments. With
    ``min_segment_chars`` set, every raw part of the split, blank ones
    included, must also be longer than that.
    """

    name: str
    pattern: re.Pattern[str]
    min_segment_chars: int = 0

    def split(self, text: str) -> list[str] | None:
        parts = self.pattern.split(text)
        if self.min_segment_chars and not all(len(part) > self.min_segment_chars for part in parts):
            return None
        segments = [part.strip() for part in parts if part.strip()]
        if len(segments) < 2:
            return None
        return segments


def boundary_strategies(min_fallback_chars: int = MIN_FALLBACK_SEGMENT_CHARS) -> tuple[BoundaryStrategy, ...]:
    return (
        BoundaryStrategy("top_post", TOP_POST_SPLIT_RE),
        BoundaryStrategy("header_block", HEADER_BLOCK_SPLIT_RE),
        BoundaryStrategy("original_message_rule", ORIGINAL_MESSAGE_RULE_RE),
        BoundaryStrategy("blank_line_run", BLANK_LINE_RUN_RE, min_segment_chars=min_fallback_chars),
    )


DEFAULT_STRATEGIES = boundary_strategies()


def segment(text: str, *, min_fallback_chars: int = MIN_FALLBACK_SEGMENT_CHARS) -> list[str]:
    raw = text or ""
    if min_fallback_chars == MIN_FALLBACK_SEGMENT_CHARS:
        strategies = DEFAULT_STRATEGIES
    else:
        strategies = boundary_strategies(min_fallback_chars)

    for strategy in strategies:
        segments = strategy.split(raw)
        if segments:
            logger.debug(
                "Split email chain",
                extra={"event": "chain_segmented", "strategy": strategy.name, "segments": len(segments)},
            )
            return segments

    return [raw.strip()]

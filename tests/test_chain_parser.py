from datetime import datetime

from email_chain_parser.services.chain_parser import ChainOptions, parse_chain


def _is_iso(value: str) -> bool:
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def test_plain_message_becomes_single_entry() -> None:
    chain = parse_chain("Hello there", "Hi")

    assert chain.subject == "Hi"
    assert len(chain.messages) == 1
    message = chain.messages[0]
    assert message.sender == "Unknown"
    assert message.body == "Hello there"
    assert message.order == 0
    assert _is_iso(message.date)


def test_top_posted_reply_chain() -> None:
    text = (
        "Thanks, sounds good.\n\n"
        "On Jan 5, 2024 at 3:00 PM, Alice Smith <alice@example.com> wrote:\n"
        "> Let's meet tomorrow."
    )
    chain = parse_chain(text, "Meeting")

    assert len(chain.messages) == 2
    latest, previous = chain.messages
    assert latest.body == "Thanks, sounds good."
    assert latest.sender == "Unknown"
    assert previous.sender == "Alice Smith <alice@example.com>"
    assert previous.date == "2024-01-05T15:00:00.000Z"
    assert not any(line.startswith(">") for line in previous.body.splitlines())


def test_outlook_header_blocks() -> None:
    text = (
        "From: Bob\nSent: Monday, Jan 1, 2024\n\nSee attached.\n\n"
        "From: Dana\nSent: Sunday, Dec 31, 2023\n\nDraft is ready."
    )
    chain = parse_chain(text, "Report")

    assert [message.sender for message in chain.messages] == ["Bob", "Dana"]
    assert [message.body for message in chain.messages] == ["See attached.", "Draft is ready."]
    assert [message.date for message in chain.messages] == [
        "2024-01-01T00:00:00.000Z",
        "2023-12-31T00:00:00.000Z",
    ]


def test_garbled_date_passes_through() -> None:
    text = (
        "From: Bob\nSent: sometime after lunch\n\nSee attached.\n\n"
        "From: Dana\nSent: Sunday, Dec 31, 2023\n\nDraft is ready."
    )
    chain = parse_chain(text, "Report")
    assert chain.messages[0].date == "sometime after lunch"


def test_lone_segment_skips_extraction() -> None:
    text = "From: Bob\nSent: Monday, Jan 1, 2024\n\nOnly one message."
    chain = parse_chain(text, "Solo")

    assert len(chain.messages) == 1
    assert chain.messages[0].sender == "Unknown"
    assert chain.messages[0].body == text


def test_order_matches_position() -> None:
    text = (
        "Newest.\n\n"
        "On Jan 7, 2024 at 8:00 AM, Carol <carol@example.com> wrote:\nMiddle.\n\n"
        "On Jan 6, 2024 at 8:00 AM, Bob <bob@example.com> wrote:\nOldest."
    )
    chain = parse_chain(text, "Thread")

    assert len(chain.messages) == 3
    assert [message.order for message in chain.messages] == [0, 1, 2]
    assert [message.body for message in chain.messages] == ["Newest.", "Middle.", "Oldest."]


def test_empty_body_still_yields_a_message() -> None:
    chain = parse_chain("", "Empty")
    assert len(chain.messages) == 1
    assert chain.messages[0].body == ""


def test_options_override_blank_line_threshold() -> None:
    text = "Hi there\n\n\nSecond bit"
    assert len(parse_chain(text, "s").messages) == 1
    options = ChainOptions(blank_line_min_segment_chars=5)
    assert len(parse_chain(text, "s", options=options).messages) == 2


def test_chain_serializes_to_plain_dict() -> None:
    payload = parse_chain("Hello there", "Hi").to_dict()

    assert set(payload) == {"subject", "messages"}
    assert payload["subject"] == "Hi"
    assert set(payload["messages"][0]) == {"sender", "date", "body", "order"}


def test_out_of_range_date_does_not_break_chain() -> None:
    text = (
        "From: Bob\nDate: 9999-12-31T23:59:00-01:00\n\nold.\n\n"
        "From: Dana\nDate: Jan 2, 2024\n\nnew."
    )
    chain = parse_chain(text, "s")

    assert len(chain.messages) == 2
    assert chain.messages[0].date == "9999-12-31T23:59:00-01:00"
    assert chain.messages[1].date == "2024-01-02T00:00:00.000Z"

import json

from email_chain_parser.cli import main

THREAD = (
    "Thanks, sounds good.\n\n"
    "On Jan 5, 2024 at 3:00 PM, Alice Smith <alice@example.com> wrote:\n"
    "> Let's meet tomorrow.\n"
)


def test_cli_parses_text_thread(tmp_path, capsys) -> None:
    path = tmp_path / "thread.txt"
    path.write_text(THREAD, encoding="utf-8")

    code = main([str(path), "--subject", "Meeting"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["subject"] == "Meeting"
    assert len(payload["messages"]) == 2


def test_cli_reads_eml_subject(tmp_path, capsys) -> None:
    path = tmp_path / "thread.eml"
    path.write_bytes(b"From: Bob <bob@example.com>\nSubject: Re: Meeting\n\n" + THREAD.encode("utf-8"))

    code = main([str(path)])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["subject"] == "Re: Meeting"
    assert payload["messages"][1]["sender"] == "Alice Smith <alice@example.com>"


def test_cli_missing_file(tmp_path, capsys) -> None:
    code = main([str(tmp_path / "missing.eml")])

    assert code == 1
    assert "error" in capsys.readouterr().err

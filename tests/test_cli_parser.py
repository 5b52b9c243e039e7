from __future__ import annotations

import pytest

from xcopr.cli.parser import parse_args


def test_parse_args_defaults_to_no_commands() -> None:
    args = parse_args([])
    assert args.coproc == []
    assert args.stream == 1
    assert args.verbose is False


def test_parse_args_keeps_coproc_order() -> None:
    args = parse_args(["-c", "printf hi", "--coproc", "tr a-z A-Z", "-c", "cat"])
    assert args.coproc == ["printf hi", "tr a-z A-Z", "cat"]


def test_parse_args_stream_and_verbose() -> None:
    args = parse_args(["-s", "4", "-v", "-c", "cat"])
    assert args.stream == 4
    assert args.verbose is True


@pytest.mark.parametrize("value", ["-1", "256", "many"])
def test_parse_args_rejects_invalid_stream_count(value: str) -> None:
    with pytest.raises(SystemExit):
        _ = parse_args(["--stream", value])


def test_parse_args_version_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _ = parse_args(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.startswith("xcopr ")

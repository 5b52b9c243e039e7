from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from xcopr import main as main_module
from xcopr.config.paths import reset_paths


def test_setup_logging_writes_to_xdg_state_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
    monkeypatch.setenv("XCOPR_LOG_LEVEL", "debug")
    reset_paths()
    captured: dict[str, Any] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    try:
        main_module.setup_logging()
    finally:
        reset_paths()

    handler = captured["handlers"][0]
    try:
        assert captured["level"] == logging.DEBUG
        assert Path(handler.baseFilename) == tmp_path / "xcopr" / "debug.log"
    finally:
        handler.close()


def test_main_exits_with_run_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "run", lambda **kwargs: 1)

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1

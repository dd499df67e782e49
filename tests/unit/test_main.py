"""Unit tests for the command-line entry point."""

from unittest.mock import patch

import pytest
import pytest_check as check

from streamchat import main


class TestRunMode:
    """Tests for choosing the run mode from RUN_MODE."""

    @pytest.mark.parametrize(
        ("env", "expected"),
        [
            ({}, "run_integrated"),
            ({"RUN_MODE": "integrated"}, "run_integrated"),
            ({"RUN_MODE": " Client "}, "run_client"),
            ({"RUN_MODE": "separate"}, "run_integrated"),
        ],
    )
    def test_mode_dispatch(self, env: dict[str, str], expected: str) -> None:
        with (
            patch.dict("os.environ", env, clear=True),
            patch.object(main, "run_client") as run_client,
            patch.object(main, "run_integrated") as run_integrated,
        ):
            main.main()

        called = {"run_client": run_client.called, "run_integrated": run_integrated.called}
        check.equal(called, {name: name == expected for name in called})


class TestBind:
    """Tests for host and port resolution."""

    def test_defaults_per_mode(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            check.equal(main._bind(8000), ("0.0.0.0", 8000))
            check.equal(main._bind(8080), ("0.0.0.0", 8080))

    def test_environment_overrides(self) -> None:
        with patch.dict("os.environ", {"HOST": "127.0.0.1", "PORT": "9000"}):
            check.equal(main._bind(8080), ("127.0.0.1", 9000))

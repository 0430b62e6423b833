"""
Tests for the command-line entry point (coretools_advisor/cli.py).
"""

from unittest.mock import patch

import pytest

from coretools_advisor.cli import build_parser, main
from coretools_advisor.versions import ProjectRuntime


@pytest.fixture
def advisor():
    with patch("coretools_advisor.cli.RuntimeVersionAdvisor") as mock_cls, \
         patch("coretools_advisor.cli.setup_logging"), \
         patch("coretools_advisor.cli.load_config"):
        yield mock_cls.return_value


class TestParser:
    """Tests for argument parsing."""

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_ensure_force(self):
        args = build_parser().parse_args(["-v", "ensure", "--force"])
        assert args.command == "ensure"
        assert args.force is True
        assert args.verbose is True


class TestMain:
    """Tests for main()."""

    def test_check(self, advisor):
        assert main(["check"]) == 0
        advisor.check.assert_called_once_with()

    def test_ensure_installed(self, advisor):
        advisor.ensure_installed.return_value = True
        assert main(["ensure", "--force"]) == 0
        advisor.ensure_installed.assert_called_once_with(force_prompt=True)

    def test_ensure_not_installed(self, advisor):
        advisor.ensure_installed.return_value = False
        assert main(["ensure"]) == 1

    def test_runtime(self, advisor, capsys):
        advisor.local_runtime.return_value = ProjectRuntime.ONE
        assert main(["runtime"]) == 0
        assert capsys.readouterr().out.strip() == "~1"

    def test_runtime_unknown(self, advisor, capsys):
        advisor.local_runtime.return_value = None
        assert main(["runtime"]) == 1
        assert capsys.readouterr().out.strip() == "unknown"

    def test_bad_config(self, tmp_path, capsys):
        with patch("coretools_advisor.cli.setup_logging"):
            assert main(["--config", str(tmp_path / "missing.yml"), "check"]) == 2
        assert "Could not load config" in capsys.readouterr().err

    def test_interrupt_exits_130(self, advisor, capsys):
        advisor.check.side_effect = KeyboardInterrupt
        assert main(["check"]) == 130
        assert "Interrupted" in capsys.readouterr().err

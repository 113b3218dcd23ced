"""Tests for the run.py entry point."""

import sys
from unittest.mock import MagicMock, patch

import pytest

import run


def _make_orchestrator_mock(valid=True, success=True):
    orchestrator = MagicMock()
    orchestrator.debug = False
    orchestrator.verbose = True
    orchestrator.languages = ["en"]
    orchestrator.include_collections = ["shop", "content"]
    orchestrator.output_manager.retention_days = 0
    orchestrator.validate_config.return_value = valid
    orchestrator.run.return_value = {"success": success}
    return orchestrator


def _main(argv, orchestrator):
    with patch.object(sys, "argv", ["run.py"] + argv), \
         patch("run.SourcingOrchestrator", return_value=orchestrator), \
         patch("run.logging.basicConfig"):
        run.main()


def test_version_exits_zero(capsys):
    with patch.object(sys, "argv", ["run.py", "--version"]):
        with pytest.raises(SystemExit) as exc_info:
            run.main()
    assert exc_info.value.code == 0
    assert "shopify-storefront-source" in capsys.readouterr().out


def test_cli_overrides_applied():
    orchestrator = _make_orchestrator_mock()
    _main(["--debug", "--quiet", "--languages", "en, fr", "--include", "Shop"], orchestrator)

    assert orchestrator.debug is True
    assert orchestrator.verbose is False
    assert orchestrator.languages == ["en", "fr"]
    assert orchestrator.include_collections == ["shop"]
    orchestrator.run.assert_called_once()
    orchestrator.print_summary.assert_called_once_with({"success": True})


def test_invalid_config_exits_before_run():
    orchestrator = _make_orchestrator_mock(valid=False)
    with pytest.raises(SystemExit) as exc_info:
        _main([], orchestrator)
    assert exc_info.value.code == 1
    orchestrator.run.assert_not_called()


def test_failed_run_exits_nonzero():
    orchestrator = _make_orchestrator_mock(success=False)
    with pytest.raises(SystemExit) as exc_info:
        _main([], orchestrator)
    assert exc_info.value.code == 1


def test_retention_cleanup_runs_when_enabled():
    orchestrator = _make_orchestrator_mock()
    orchestrator.output_manager.retention_days = 30
    orchestrator.output_manager.cleanup_old_folders.return_value = 2
    _main([], orchestrator)
    orchestrator.output_manager.cleanup_old_folders.assert_called_once_with()

# tests/unit/test_main.py
"""Tests for the CLI entry point (service mocked)."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from creditai import main as cli
from creditai.api.models import PagedResponse, ProfileResponse, RiskAnalysisResponse
from creditai.core.errors import NotFoundError, TargetNotEligibleError
from creditai.core.models import RankedMatch
from creditai.logging.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STORE_BACKEND", "memory")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    saved = list(root.handlers)
    yield
    root.handlers[:] = saved


@pytest.fixture
def service(monkeypatch) -> AsyncMock:
    svc = AsyncMock()
    svc.close = MagicMock()
    monkeypatch.setattr(cli, "_service", lambda settings: svc)
    return svc


class TestParser:
    def test_similar_args(self):
        args = cli._build_parser().parse_args(["similar", "abc", "-n", "7"])
        assert args.identity == "abc"
        assert args.limit == 7
        assert args.func is cli._cmd_similar

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])
        assert exc_info.value.code == 0
        assert "creditai" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == cli.EXIT_ERROR
        assert "usage" in capsys.readouterr().out


class TestCommands:
    def test_ingest(self, service, make_profile, capsys):
        service.ingest.return_value = ProfileResponse.from_profile(make_profile("p1"))
        code = cli.main(["ingest", "Ana Souza", "720", "Pays invoices on time every month."])
        assert code == cli.EXIT_OK
        request = service.ingest.call_args.args[0]
        assert request.name == "Ana Souza"
        assert request.numeric_score == 720
        assert json.loads(capsys.readouterr().out)["identity"] == "p1"

    def test_ingest_invalid_score(self, service):
        code = cli.main(["ingest", "Ana Souza", "1200", "Pays invoices on time every month."])
        assert code == cli.EXIT_USER_ERROR
        service.ingest.assert_not_called()

    def test_ingest_raw(self, service, make_profile, tmp_path):
        raw = tmp_path / "raw.json"
        raw.write_text(json.dumps({"income": "pension"}), encoding="utf-8")
        service.ingest_from_raw_data.return_value = ProfileResponse.from_profile(
            make_profile("p2")
        )
        code = cli.main(["ingest-raw", "Carlos", "810", str(raw), "--instruction", "Be brief."])
        assert code == cli.EXIT_OK
        request = service.ingest_from_raw_data.call_args.args[0]
        assert request.raw_data == {"income": "pension"}
        assert request.instruction == "Be brief."

    def test_similar_output(self, service, capsys):
        service.find_similar.return_value = [
            RankedMatch(
                identity="c1", display_name="Bruno", numeric_score=650,
                similarity=0.92, score_similarity=0.97, final_score=0.9225,
                rationale="Near-identical behavioral profile",
            )
        ]
        assert cli.main(["similar", "target", "--limit", "3"]) == cli.EXIT_OK
        service.find_similar.assert_awaited_once_with("target", 3)
        out = capsys.readouterr().out
        assert " 1. Bruno [c1] score=650 similarity=92.00%" in out
        assert "- Near-identical behavioral profile" in out

    def test_similar_no_matches(self, service, capsys):
        service.find_similar.return_value = []
        assert cli.main(["similar", "target"]) == cli.EXIT_OK
        service.find_similar.assert_awaited_once_with("target", None)
        assert "No similar profiles found." in capsys.readouterr().out

    def test_list(self, service, capsys):
        service.list_profiles.return_value = PagedResponse[ProfileResponse](
            page_number=2, page_size=5, total_items=6, total_pages=2, items=[]
        )
        assert cli.main(["list", "--page", "2", "--page-size", "5"]) == cli.EXIT_OK
        service.list_profiles.assert_awaited_once_with(2, 5)
        assert json.loads(capsys.readouterr().out)["total_pages"] == 2

    def test_analyze(self, service, capsys):
        service.analyze_risk.return_value = RiskAnalysisResponse(
            identity="p1", question="Risk?", analysis="Credit risk is Low."
        )
        assert cli.main(["analyze", "p1", "Risk?"]) == cli.EXIT_OK
        assert capsys.readouterr().out.strip() == "Credit risk is Low."


class TestExitCodes:
    def test_not_found_is_user_error(self, service):
        service.get_profile.side_effect = NotFoundError("nope")
        assert cli.main(["show", "nope"]) == cli.EXIT_USER_ERROR

    def test_not_eligible_is_error(self, service):
        service.find_similar.side_effect = TargetNotEligibleError("bare")
        assert cli.main(["similar", "bare"]) == cli.EXIT_ERROR

    def test_unexpected_failure(self, service):
        service.find_similar.side_effect = RuntimeError("db locked")
        assert cli.main(["similar", "x"]) == cli.EXIT_ERROR

    def test_keyboard_interrupt(self, service, monkeypatch):
        def _interrupted(coro):
            coro.close()
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.asyncio, "run", _interrupted)
        assert cli.main(["list"]) == cli.EXIT_INTERRUPTED


class TestLifecycle:
    def test_service_closed_after_command(self, service):
        service.list_profiles.return_value = PagedResponse[ProfileResponse](
            page_number=1, page_size=20, total_items=0, total_pages=0, items=[]
        )
        assert cli.main(["list"]) == cli.EXIT_OK
        service.close.assert_called_once_with()

    def test_service_closed_after_failure(self, service):
        service.find_similar.side_effect = RuntimeError("db locked")
        assert cli.main(["similar", "x"]) == cli.EXIT_ERROR
        service.close.assert_called_once_with()

    def test_inconsistent_env_file(self, service, tmp_path):
        (tmp_path / ".env").write_text(
            "RANKING_VECTOR_WEIGHT=0.5\nRANKING_SCORE_WEIGHT=0.05\n", encoding="utf-8"
        )
        assert cli.main(["list"]) == cli.EXIT_ERROR
        service.list_profiles.assert_not_called()

    def test_invalid_env_value(self, service, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "postgres")
        assert cli.main(["show", "p1"]) == cli.EXIT_ERROR
        service.get_profile.assert_not_called()

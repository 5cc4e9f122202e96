"""Tests for CLI commands — CliRunner used throughout, no server is started."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner, Result


def _invoke(*args: str) -> Result:
    from cv_mcp.cli.main import cli

    runner = CliRunner()
    with patch("cv_mcp.cli.main.load_dotenv"):
        return runner.invoke(cli, list(args), catch_exceptions=False)


# ── cv-mcp tools ───────────────────────────────────────────────────────────────


class TestToolsCommand:
    def test_lists_both_tools(self) -> None:
        result = _invoke("tools")
        assert result.exit_code == 0
        assert "ask_about_cv" in result.output
        assert "send_email" in result.output

    def test_shows_required_arguments(self) -> None:
        result = _invoke("tools")
        assert "recipient, subject, body" in result.output


# ── cv-mcp ask ─────────────────────────────────────────────────────────────────


class TestAskCommand:
    def test_fallback_answer_without_credentials(
        self, clean_env: pytest.MonkeyPatch, cv_file: Path
    ) -> None:
        with patch("cv_mcp.server.DocumentCache") as cache_cls:
            from cv_mcp.document.cache import DocumentCache

            cache_cls.side_effect = lambda path: DocumentCache(path, extractor=lambda _: "Senior Engineer")
            result = _invoke("ask", "Where did you work?", "--cv", str(cv_file))

        assert result.exit_code == 0
        assert "Where did you work?" in result.output
        assert "Senior Engineer" in result.output

    def test_uses_cv_option_path(self, clean_env: pytest.MonkeyPatch, cv_file: Path) -> None:
        seen: list[str] = []
        with patch("cv_mcp.server.DocumentCache") as cache_cls:
            from cv_mcp.document.cache import DocumentCache

            def factory(path: str) -> DocumentCache:
                seen.append(path)
                return DocumentCache(path, extractor=lambda _: "text")

            cache_cls.side_effect = factory
            _invoke("ask", "Q", "--cv", str(cv_file))

        assert seen == [str(cv_file)]

    def test_missing_cv_exits_nonzero(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        result = _invoke("ask", "Q", "--cv", str(tmp_path / "absent.pdf"))
        assert result.exit_code == 1
        assert "Could not load CV file" in result.output

    def test_does_not_require_mail_credentials(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        result = _invoke("ask", "Q", "--cv", str(tmp_path / "absent.pdf"))
        assert "EMAIL_USER" not in result.output


# ── cv-mcp serve ───────────────────────────────────────────────────────────────


class TestServeCommand:
    def test_delegates_to_server_main(self) -> None:
        with patch("cv_mcp.cli.commands.server_main") as server_main:
            result = _invoke("serve")
        assert result.exit_code == 0
        server_main.assert_called_once_with()

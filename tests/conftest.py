"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from cv_mcp.config import Settings

CV_TEXT = "Senior Engineer with 10 years of experience building distributed systems. " * 60


@pytest.fixture
def cv_text() -> str:
    """A CV long enough to exercise both truncation limits."""
    return CV_TEXT


@pytest.fixture
def cv_file(tmp_path: Path) -> Path:
    """A placeholder CV file; tests pair it with a fake extractor."""
    path = tmp_path / "my-cv.pdf"
    path.write_bytes(b"%PDF-1.4 placeholder")
    return path


@pytest.fixture
def settings(cv_file: Path) -> Settings:
    return Settings(
        email_user="me@example.com",
        email_pass="app-password",
        cv_path=str(cv_file),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable Settings.from_env() reads."""
    for name in (
        "EMAIL_USER",
        "EMAIL_PASS",
        "ANTHROPIC_API_KEY",
        "CV_PATH",
        "SMTP_HOST",
        "SMTP_PORT",
        "SMTP_STARTTLS",
        "ANSWER_MODEL",
        "ANSWER_MAX_TOKENS",
        "CV_PROMPT_CHAR_LIMIT",
        "CV_PREVIEW_CHAR_LIMIT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch

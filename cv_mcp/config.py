"""Startup configuration — read once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CV_PATH = "./assets/my-cv.pdf"
DEFAULT_SMTP_HOST = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 465
DEFAULT_ANSWER_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_ANSWER_MAX_TOKENS = 250

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class StartupMisconfiguration(Exception):
    """Raised when required configuration is missing or malformed at boot."""


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise StartupMisconfiguration(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration.

    ``email_user`` doubles as the fixed sender identity for every outgoing
    notification.  ``anthropic_api_key`` is optional: when it is empty the
    answer tool runs on the deterministic fallback instead of the model.
    """

    email_user: str
    email_pass: str
    anthropic_api_key: str = ""
    cv_path: str = DEFAULT_CV_PATH
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_starttls: bool = False
    answer_model: str = DEFAULT_ANSWER_MODEL
    answer_max_tokens: int = DEFAULT_ANSWER_MAX_TOKENS
    prompt_char_limit: int = 3000
    preview_char_limit: int = 100
    log_level: str = "INFO"

    @property
    def has_inference_credential(self) -> bool:
        return bool(self.anthropic_api_key)

    @classmethod
    def from_env(cls, *, require_mail: bool = True) -> Settings:
        """Build Settings from environment variables.

        Raises:
            StartupMisconfiguration: if EMAIL_USER / EMAIL_PASS are missing
                (when ``require_mail`` is set) or a numeric variable is malformed.
        """
        email_user = os.environ.get("EMAIL_USER", "").strip()
        email_pass = os.environ.get("EMAIL_PASS", "")

        if require_mail:
            missing = [
                name
                for name, value in (("EMAIL_USER", email_user), ("EMAIL_PASS", email_pass))
                if not value
            ]
            if missing:
                raise StartupMisconfiguration(
                    "EMAIL_USER and EMAIL_PASS environment variables must be set "
                    f"(missing: {', '.join(missing)})"
                )

        return cls(
            email_user=email_user,
            email_pass=email_pass,
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", "").strip(),
            cv_path=os.environ.get("CV_PATH") or DEFAULT_CV_PATH,
            smtp_host=os.environ.get("SMTP_HOST") or DEFAULT_SMTP_HOST,
            smtp_port=_env_int("SMTP_PORT", DEFAULT_SMTP_PORT),
            smtp_starttls=_env_bool("SMTP_STARTTLS", False),
            answer_model=os.environ.get("ANSWER_MODEL") or DEFAULT_ANSWER_MODEL,
            answer_max_tokens=_env_int("ANSWER_MAX_TOKENS", DEFAULT_ANSWER_MAX_TOKENS),
            prompt_char_limit=_env_int("CV_PROMPT_CHAR_LIMIT", 3000),
            preview_char_limit=_env_int("CV_PREVIEW_CHAR_LIMIT", 100),
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )

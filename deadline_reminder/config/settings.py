import json
from datetime import date
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    github_actions: bool = False

    # LANGUAGE itself is a locale variable on most systems.
    language: Literal["en", "ja"] = Field(default="en", validation_alias="DEADLINE_LANGUAGE")
    repository: str = Field(
        default="", validation_alias=AliasChoices("REPOSITORY", "GITHUB_REPOSITORY")
    )
    default_branch: str = "main"
    github_server_url: str = "https://github.com"

    scan_directory: str = "."
    source_extensions: str = ".dart"

    notify_days_before: int = Field(default=0, ge=0)
    notify_past_deadlines: bool = False
    notify_when_empty: bool = False

    github_to_slack_map: str = ""
    custom_template: str = ""

    slack_channel: str = ""
    slack_webhook_url: str = ""
    slack_bot_token: str = ""
    slack_timeout_seconds: int = 30

    max_code_lines: int = Field(default=15, ge=1)
    max_blocks: int = Field(default=30, ge=5)
    blame_max_workers: int = Field(default=4, ge=1)

    reference_date: date | None = None
    github_output: str = ""

    @property
    def mention_map(self) -> dict[str, str]:
        return parse_mention_map(self.github_to_slack_map)

    @property
    def extensions(self) -> tuple[str, ...]:
        parts = (p.strip() for p in self.source_extensions.split(","))
        return tuple(p if p.startswith(".") else f".{p}" for p in parts if p)


def parse_mention_map(raw: str) -> dict[str, str]:
    """Parse a username -> Slack user ID map.

    Accepts a JSON object or comma-separated ``key=value`` pairs.
    """
    if not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, dict):
        return {str(k): str(v) for k, v in parsed.items()}

    mapping: dict[str, str] = {}
    for pair in raw.split(","):
        key, _, value = pair.partition("=")
        key, value = key.strip(), value.strip()
        if key and value:
            mapping[key] = value
    return mapping

"""Configuration loading for git_reporter."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from git_reporter.git.domain.value_objects import Period

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Values consumed by the reporting pipeline.

    Attributes:
        date_format: Day-key display format (dayjs-style tokens)
        default_period: Period used when the caller does not pick one
        llm_provider: Which chat model family backs the AI report
        openai_api_key: Credential for the OpenAI provider
        openai_model: OpenAI model name
        anthropic_api_key: Credential for the Anthropic provider
        anthropic_model: Anthropic model name
        llm_temperature: Sampling temperature for the AI report
        llm_max_tokens: Maximum output length for the AI report
        all_branches: Whether date-bounded queries search every branch
        broad_limit: Commit cap for the broad fallback query
        recent_limit: Commit cap for the relaxed "recent commits" query
        branch_history_limit: Commits scanned per branch when annotating
        max_containment_queries: Cap on per-commit branch containment lookups
        log_level: Logging level name
        log_json: Render log events as JSON instead of console lines
    """

    date_format: str = "YYYY-MM-DD"
    default_period: Period = Period.TODAY
    llm_provider: str = "openai"
    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    all_branches: bool = True
    broad_limit: int = 100
    recent_limit: int = 50
    branch_history_limit: int = 100
    max_containment_queries: int = 50
    log_level: str = "WARNING"
    log_json: bool = False


def _load_env_file(env_file: Path | None = None) -> None:
    """Load environment variables from a .env file."""
    if env_file is not None:
        if not env_file.exists():
            raise ValueError(f"Environment file not found: {env_file}")
        load_dotenv(env_file)
    else:
        # Fallback: search from the current directory upwards
        load_dotenv(find_dotenv(usecwd=True))


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'")


def _get_period(name: str, default: Period) -> Period:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return Period(raw.strip())
    except ValueError:
        supported = ", ".join(period.value for period in Period)
        raise ValueError(
            f"Invalid {name}: '{raw}'. Supported values: {supported}"
        ) from None


def load_settings(env_file: Path | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional explicit .env file. When omitted, a .env file found
                  from the current directory is used if present.

    Returns:
        Settings populated from environment variables, defaults elsewhere

    Raises:
        ValueError: If a variable holds a value of the wrong shape
    """
    _load_env_file(env_file)

    defaults = Settings()
    return Settings(
        date_format=os.getenv("GIT_REPORTER_DATE_FORMAT") or defaults.date_format,
        default_period=_get_period("GIT_REPORTER_DEFAULT_PERIOD", defaults.default_period),
        llm_provider=(os.getenv("LLM_PROVIDER") or defaults.llm_provider).lower(),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL") or defaults.openai_model,
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        anthropic_model=os.getenv("ANTHROPIC_MODEL") or defaults.anthropic_model,
        llm_temperature=_get_float("LLM_TEMPERATURE", defaults.llm_temperature),
        llm_max_tokens=_get_int("LLM_MAX_TOKENS", defaults.llm_max_tokens),
        all_branches=_get_bool("GIT_REPORTER_ALL_BRANCHES", defaults.all_branches),
        broad_limit=_get_int("GIT_REPORTER_BROAD_LIMIT", defaults.broad_limit),
        recent_limit=_get_int("GIT_REPORTER_RECENT_LIMIT", defaults.recent_limit),
        branch_history_limit=_get_int(
            "GIT_REPORTER_BRANCH_HISTORY_LIMIT", defaults.branch_history_limit
        ),
        max_containment_queries=_get_int(
            "GIT_REPORTER_MAX_CONTAINMENT_QUERIES", defaults.max_containment_queries
        ),
        log_level=(os.getenv("GIT_REPORTER_LOG_LEVEL") or defaults.log_level).upper(),
        log_json=_get_bool("GIT_REPORTER_LOG_JSON", defaults.log_json),
    )

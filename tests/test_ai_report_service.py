from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from conftest import FakeLLMAgent, make_commit
from git_reporter.core.config import Settings
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.domain.value_objects import WorkReportInput
from git_reporter.summarization.repositories.base_langchain_agent import BaseLangChainAgent
from git_reporter.summarization.repositories.factory import LLMAgentProvider, create_llm_agent
from git_reporter.summarization.repositories.implementations import (
    LangChainClaudeAgent,
    LangChainOpenAIAgent,
)
from git_reporter.summarization.services.ai_report_service import (
    AIReportService,
    format_commit_digest,
)


class StubChatModel:
    """Chat model double returning a canned response."""

    def __init__(self, content=None, error: Exception | None = None) -> None:
        self._content = content
        self._error = error
        self.calls: list[list] = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self._error is not None:
            raise self._error
        return SimpleNamespace(content=self._content)


class StubAgent(BaseLangChainAgent):
    def __init__(self, llm: StubChatModel, template_path: Path | None = None) -> None:
        self._llm = llm
        super().__init__(template_path=template_path)


INPUT = WorkReportInput(digest="## 2024-03-14\n\n- \"feat: x\" by Alice (abc1234)\n", commit_count=1)


def test_format_commit_digest_groups_days_ascending() -> None:
    commits = [
        make_commit("later", datetime(2024, 3, 15, 9, 0), commit_hash="2222222", author="Bob"),
        make_commit("earlier", datetime(2024, 3, 14, 9, 0), commit_hash="1111111"),
    ]
    digest = format_commit_digest(commits)
    assert digest == (
        "## 2024-03-14\n"
        "\n"
        '- "earlier" by Alice (1111111)\n'
        "\n"
        "## 2024-03-15\n"
        "\n"
        '- "later" by Bob (2222222)\n'
    )


def test_ai_report_service_passes_digest_to_agent() -> None:
    agent = FakeLLMAgent(report="done")
    service = AIReportService(LLMAgentProvider(Settings(), factory=lambda settings: agent))

    commits = [make_commit("feat: a", datetime(2024, 3, 14, 9, 0))]
    assert service.render(commits) == "done"
    assert agent.inputs[0].commit_count == 1
    assert '"feat: a" by Alice' in agent.inputs[0].digest


def test_provider_builds_lazily_and_resets() -> None:
    """The agent is built on first use, cached, and rebuilt after reset."""
    built: list[Settings] = []

    def factory(settings: Settings) -> FakeLLMAgent:
        built.append(settings)
        return FakeLLMAgent()

    provider = LLMAgentProvider(Settings(), factory=factory)
    assert built == []

    first = provider.get()
    assert provider.get() is first
    assert len(built) == 1

    new_settings = Settings(llm_provider="anthropic")
    provider.reset(new_settings)
    second = provider.get()
    assert second is not first
    assert built[-1] is new_settings


def test_factory_rejects_unknown_provider() -> None:
    with pytest.raises(AdapterError, match="Invalid LLM_PROVIDER"):
        create_llm_agent(Settings(llm_provider="mistral"))


@pytest.mark.parametrize(
    ("provider", "variable"),
    [("openai", "OPENAI_API_KEY"), ("gpt", "OPENAI_API_KEY"), ("claude", "ANTHROPIC_API_KEY")],
)
def test_factory_requires_api_key(provider: str, variable: str) -> None:
    with pytest.raises(AdapterError, match=variable):
        create_llm_agent(Settings(llm_provider=provider))


def test_factory_builds_configured_agents() -> None:
    openai_agent = create_llm_agent(Settings(llm_provider="openai", openai_api_key="sk-test"))
    claude_agent = create_llm_agent(
        Settings(llm_provider="anthropic", anthropic_api_key="sk-ant-test")
    )
    assert isinstance(openai_agent, LangChainOpenAIAgent)
    assert isinstance(claude_agent, LangChainClaudeAgent)


def test_agent_sends_system_and_filled_prompt() -> None:
    llm = StubChatModel(content="  # Report\n")
    report = StubAgent(llm).generate_report(INPUT)

    assert report == "# Report"
    system, human = llm.calls[0]
    assert isinstance(system, SystemMessage)
    assert isinstance(human, HumanMessage)
    assert "Here are the 1 commits:" in human.content
    assert INPUT.digest in human.content


def test_agent_joins_list_content() -> None:
    llm = StubChatModel(content=[{"type": "text", "text": "# Part one"}, "part two"])
    assert StubAgent(llm).generate_report(INPUT) == "# Part one part two"


def test_agent_rejects_empty_content() -> None:
    with pytest.raises(AdapterError, match="No content"):
        StubAgent(StubChatModel(content="   ")).generate_report(INPUT)


def test_agent_wraps_model_errors() -> None:
    llm = StubChatModel(error=ConnectionError("network down"))
    with pytest.raises(AdapterError, match="network down") as exc_info:
        StubAgent(llm).generate_report(INPUT)
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_custom_template(tmp_path: Path) -> None:
    template = tmp_path / "prompt.md"
    template.write_text("Summarize {commit_count}:\n{commit_data}", encoding="utf-8")
    agent = StubAgent(StubChatModel(content="ok"), template_path=template)
    assert agent.format_prompt(INPUT) == f"Summarize 1:\n{INPUT.digest}"


def test_missing_template_raises(tmp_path: Path) -> None:
    with pytest.raises(AdapterError, match="template not found"):
        StubAgent(StubChatModel(content="ok"), template_path=tmp_path / "missing.md")


@pytest.mark.parametrize(
    "template_text",
    ["Use {\"format\": \"markdown\"} for {commit_data}", "Unbalanced { brace {commit_data}"],
)
def test_template_with_stray_braces_raises_adapter_error(
    tmp_path: Path, template_text: str
) -> None:
    """A broken custom template surfaces as AdapterError, before any model call."""
    template = tmp_path / "prompt.md"
    template.write_text(template_text, encoding="utf-8")
    llm = StubChatModel(content="ok")

    with pytest.raises(AdapterError, match="Invalid report prompt template"):
        StubAgent(llm, template_path=template).generate_report(INPUT)
    assert llm.calls == []


def test_agent_ignores_unknown_content_blocks() -> None:
    llm = StubChatModel(content=[{"type": "text", "text": "# Report"}, 42, None])
    assert StubAgent(llm).generate_report(INPUT) == "# Report"

import pytest

from paper_assistant.prompts import SUMMARY_PREFIX, build_messages, build_summary_prompt


@pytest.mark.parametrize(
    "fmt, suffix",
    [
        ("abstract", "Provide a concise abstract-style summary."),
        ("full", "Provide a detailed one-page summary covering key points."),
        ("flowchart", "Create a text-based flowchart showing the main concepts and their relationships."),
    ],
)
def test_known_formats_append_instruction(fmt: str, suffix: str) -> None:
    assert build_summary_prompt(fmt) == SUMMARY_PREFIX + suffix


@pytest.mark.parametrize("fmt", ["", "bullet", "ABSTRACT", "full ", None])
def test_unknown_format_is_bare_prefix(fmt: str | None) -> None:
    assert build_summary_prompt(fmt) == "Summarize the following research paper:\n\n"


def test_build_messages_is_system_then_user() -> None:
    messages = build_messages("Graph theory basics", "abstract")
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[1]["content"] == "Graph theory basics"

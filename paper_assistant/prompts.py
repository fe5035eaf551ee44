from .models import SummaryFormat

SUMMARY_PREFIX = "Summarize the following research paper:\n\n"

FORMAT_INSTRUCTIONS = {
    SummaryFormat.ABSTRACT.value: "Provide a concise abstract-style summary.",
    SummaryFormat.FULL.value: "Provide a detailed one-page summary covering key points.",
    SummaryFormat.FLOWCHART.value: "Create a text-based flowchart showing the main concepts and their relationships.",
}


def build_summary_prompt(fmt: str | None) -> str:
    return SUMMARY_PREFIX + FORMAT_INSTRUCTIONS.get(fmt, "")


def build_messages(text: str, fmt: str | None) -> list[dict]:
    return [
        {"role": "system", "content": build_summary_prompt(fmt)},
        {"role": "user", "content": text},
    ]

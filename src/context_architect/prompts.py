"""LLM prompt templates for knowledge probing.

The tool never calls a model itself; these strings are emitted for the
caller to send to whichever probe model the project configures.
"""

# ── Redundancy probe (batched) ────────────────────────────────────

PROBE_BATCH_PROMPT = """\
You are auditing the instruction file an AI coding agent reads before \
working in a repository. Some of its statements restate what a capable \
agent already does by default; others carry knowledge specific to this \
project.

## Task
For each numbered statement below, decide whether a fresh agent with no \
access to this file would already behave that way.

## Labels
- REDUNDANT: standard practice or the agent's default behavior; the \
statement can be deleted without changing outcomes.
- PROJECT-SPECIFIC: a convention, path, command or constraint the agent \
could not infer on its own; keep it.

## Output format
One line per statement, in the same order, exactly:
<number>. <REDUNDANT|PROJECT-SPECIFIC> - <one short reason>

## Statements
{statements}
"""


def format_numbered(statements: list[str], start: int = 1) -> str:
    """Render statements as a numbered list starting at ``start``."""
    return "\n".join(
        f"{number}. {text}"
        for number, text in enumerate(statements, start)
    )

"""CLI entry points: ``ccs-score``, ``detect-antipatterns``,
``knowledge-probe``, ``token-estimate`` and the umbrella
``context-architect`` command.

Every tool prints JSON on stdout and exits 0 (clean), 1 (issues found)
or 2 (usage or I/O error, message on stderr).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TypeAlias

from context_architect import __version__
from context_architect.analysis import (
    build_probe_batches,
    calculate_ccs,
    detect_antipatterns,
    detect_framework,
    estimate_project_tokens,
    extract_statements,
    to_probe_questions,
)
from context_architect.analysis.project import load_project
from context_architect.config import (
    Settings,
    load_config,
    resolve_context_file,
)
from context_architect.constants import (
    EXIT_ERROR,
    EXIT_ISSUES,
    EXIT_OK,
    Phase,
)
from context_architect.logging_config import setup_logging

logger = logging.getLogger(__name__)

Handler: TypeAlias = Callable[[argparse.Namespace, Settings], int]


# ── Argument definitions ─────────────────────────────────────


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--context-file",
        default=None,
        help=(
            "Context file relative to the root "
            "(default: first of context_files in config, else CLAUDE.md)"
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Project root (default: current directory)",
    )


def _add_score_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Project root (default: current directory)",
    )
    parser.add_argument(
        "--root",
        dest="root_option",
        default=None,
        help="Project root, alternative to the positional argument",
    )
    _add_common_arguments(parser)


def _add_detect_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--phase",
        default=Phase.STRUCTURE.value,
        help=(
            "Detection phase: "
            + ", ".join(p.value for p in Phase)
            + " (default: structure)"
        ),
    )
    _add_root_option(parser)
    _add_common_arguments(parser)


def _add_probe_arguments(parser: argparse.ArgumentParser) -> None:
    _add_root_option(parser)
    parser.add_argument(
        "--extract",
        action="store_true",
        help="Extract directive statements from the context file",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="Group statements into numbered probe prompts",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Statements per batch (default: from settings, 10)",
    )
    parser.add_argument(
        "--questions",
        action="store_true",
        help="Rewrite statements as neutral probe questions",
    )
    _add_common_arguments(parser)


def _add_tokens_arguments(parser: argparse.ArgumentParser) -> None:
    _add_root_option(parser)
    _add_common_arguments(parser)


# ── Handlers ─────────────────────────────────────────────────


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _run_score(args: argparse.Namespace, _settings: Settings) -> int:
    root = args.root_option or args.root or "."
    result = calculate_ccs(root, args.context_file)
    _print_json(result.model_dump(mode="json", exclude_none=True))
    return EXIT_ISSUES if result.total > 0 else EXIT_OK


def _run_detect(args: argparse.Namespace, _settings: Settings) -> int:
    valid = [p.value for p in Phase]
    if args.phase not in valid:
        print(
            f"Error: invalid phase '{args.phase}'. "
            f"Must be one of: {', '.join(valid)}",
            file=sys.stderr,
        )
        return EXIT_ERROR

    result = detect_antipatterns(args.root, args.phase, args.context_file)
    _print_json(result.model_dump(mode="json", exclude_none=True))
    return EXIT_ISSUES if result.findings else EXIT_OK


def _run_probe(args: argparse.Namespace, settings: Settings) -> int:
    if not args.extract:
        print(
            "Error: --extract is required. Usage: knowledge-probe "
            "--root <path> --extract [--batch] [--questions]",
            file=sys.stderr,
        )
        return EXIT_ERROR

    project = load_project(args.root, args.context_file)
    if project is None:
        path = resolve_context_file(
            Path(args.root).absolute(),
            args.context_file,
            load_config(args.root),
        )
        print(f"Error: could not read {path}", file=sys.stderr)
        return EXIT_ERROR

    statements = extract_statements(project.text)
    logger.debug("Extracted %d statement(s)", len(statements))

    if args.batch:
        size = (
            args.batch_size
            if args.batch_size is not None
            else settings.probe_batch_size
        )
        batches = build_probe_batches(statements, size)
        _print_json([b.model_dump(mode="json") for b in batches])
    elif args.questions:
        questions = to_probe_questions(
            statements, detect_framework(project.root)
        )
        _print_json([q.model_dump(mode="json") for q in questions])
    else:
        _print_json(statements)
    return EXIT_OK


def _run_tokens(args: argparse.Namespace, _settings: Settings) -> int:
    result = estimate_project_tokens(args.root, args.context_file)
    _print_json(result.model_dump(mode="json"))
    return EXIT_OK


def _execute(handler: Handler, args: argparse.Namespace) -> int:
    """Run a handler with logging set up and errors mapped to exit 2."""
    try:
        settings = Settings()
        setup_logging("DEBUG" if args.verbose else settings.log_level)
        return handler(args, settings)
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


# ── Parsers ──────────────────────────────────────────────────


def _build_tool_parser(
    prog: str,
    description: str,
    add_arguments: Callable[[argparse.ArgumentParser], None],
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    add_arguments(parser)
    return parser


_TOOLS: dict[str, tuple[str, str, Callable[..., None], Handler]] = {
    "score": (
        "ccs-score",
        "Compute the Context Complexity Score of a project.",
        _add_score_arguments,
        _run_score,
    ),
    "detect": (
        "detect-antipatterns",
        "Detect context-file anti-patterns in one phase.",
        _add_detect_arguments,
        _run_detect,
    ),
    "probe": (
        "knowledge-probe",
        "Extract directive statements for redundancy probing.",
        _add_probe_arguments,
        _run_probe,
    ),
    "tokens": (
        "token-estimate",
        "Estimate tokens for the context file and linked docs.",
        _add_tokens_arguments,
        _run_tokens,
    ),
}


def _build_parser() -> argparse.ArgumentParser:
    """Build the umbrella argument parser."""
    parser = argparse.ArgumentParser(
        prog="context-architect",
        description=(
            "Structural analysis of AI-agent context files "
            "and their documentation tree."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")
    for command, (_, description, add_arguments, _) in _TOOLS.items():
        add_arguments(sub.add_parser(command, help=description))
    return parser


def _run_tool(name: str, argv: Sequence[str] | None) -> int:
    prog, description, add_arguments, handler = _TOOLS[name]
    parser = _build_tool_parser(prog, description, add_arguments)
    args = parser.parse_args(argv)
    return _execute(handler, args)


# ── Entry points ─────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    """Umbrella CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"context-architect {__version__}")
        sys.exit(EXIT_OK)

    if args.command is None:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    handler = _TOOLS[args.command][3]
    sys.exit(_execute(handler, args))


def ccs_score_main(argv: Sequence[str] | None = None) -> None:
    sys.exit(_run_tool("score", argv))


def detect_antipatterns_main(argv: Sequence[str] | None = None) -> None:
    sys.exit(_run_tool("detect", argv))


def knowledge_probe_main(argv: Sequence[str] | None = None) -> None:
    sys.exit(_run_tool("probe", argv))


def token_estimate_main(argv: Sequence[str] | None = None) -> None:
    sys.exit(_run_tool("tokens", argv))


if __name__ == "__main__":
    main()

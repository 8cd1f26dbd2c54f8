"""
Command-line interface for climb-you onboarding

Inspect the question flow, validate answer files, enforce quest limits
and run quest generation from the terminal.
"""

import asyncio
import sys
import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .config import Config
from .providers import get_provider
from .quests.constraints import QuestConstraints, enforce_constraints
from .quests.generator import QuestGenerator
from .quiz.bank import BLOCK_TITLES
from .quiz.branching import get_all_questions
from .quiz.schema import AnswerMap
from .quiz.validation import validate_answers

GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"


def load_json(path: str):
    """Read a JSON file, exiting with a message if it can't be read."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        sys.exit(2)


def load_answers(path: Optional[str]) -> AnswerMap:
    if not path:
        return AnswerMap()
    data = load_json(path)
    if not isinstance(data, dict):
        print(f"{path}: expected a JSON object of answers", file=sys.stderr)
        sys.exit(2)
    return AnswerMap.from_dict(data)


def cmd_questions(args) -> int:
    questions = get_all_questions(load_answers(args.answers))

    if args.json:
        print(json.dumps([q.to_dict() for q in questions], indent=2, ensure_ascii=False))
        return 0

    current_block = None
    for q in questions:
        if q.block != current_block:
            current_block = q.block
            print(f"\n== {q.block.value}: {BLOCK_TITLES[q.block]} ==")
        print(f"{q.id.value}. {q.prompt}")
        for option in q.options:
            print(f"    {option.id:<24} {DIM}{option.data_key}={option.value!r}{RESET}")
    print()
    return 0


def cmd_validate(args, config: Config) -> int:
    answers = load_answers(args.file)
    result = validate_answers(answers, min_completion_ratio=config.validation.min_completion_ratio)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        color, label = (GREEN, "VALID") if result.is_valid else (RED, "INCOMPLETE")
        print(f"{color}{label}{RESET} {result.completion_ratio:.0%} answered")
        if result.missing_fields:
            print(f"  missing: {', '.join(result.missing_fields)}")

    return 0 if result.is_valid else 1


def cmd_enforce(args, config: Config) -> int:
    data = load_json(args.file)
    if isinstance(data, dict):
        data = data.get("quests", [])
    if not isinstance(data, list):
        print(f"{args.file}: expected a list of quests", file=sys.stderr)
        return 2

    constraints = QuestConstraints.from_config(config.quests)
    quests = enforce_constraints(data, budget=args.budget, constraints=constraints)
    print(json.dumps([q.to_dict() for q in quests], indent=2, ensure_ascii=False))
    return 0


def cmd_generate(args, config: Config) -> int:
    answers = load_answers(args.answers)

    provider_name = "mock" if args.mock or not config.environment.use_real_ai else config.models.provider
    if args.provider and not args.mock:
        provider_name = args.provider
    try:
        provider = get_provider(provider_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    model = config.models.model or None
    if provider_name == "mock":
        model = None
    generator = QuestGenerator(
        provider,
        model=model,
        constraints=QuestConstraints.from_config(config.quests),
        temperature=config.models.temperature,
        max_tokens=config.models.max_tokens,
    )
    batch = asyncio.run(generator.generate(args.goal, answers, count=args.count))

    if args.json:
        print(json.dumps(batch.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(f"\nQuests for: {args.goal}  {DIM}(source: {batch.source}){RESET}\n")
    for i, quest in enumerate(batch.quests, 1):
        print(f"{i}. {quest.title}  [{quest.pattern}, {quest.minutes} min, difficulty {quest.difficulty:.2f}]")
        print(f"   -> {quest.deliverable}")
    print(f"\nTotal: {batch.total_minutes} min")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climb-you",
        description="Onboarding questions, answer validation and daily quests",
        epilog="Example: climb-you generate \"Pass the AWS SAA exam\" --answers answers.json --mock",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    questions_parser = subparsers.add_parser("questions", help="Show questions with resolved options")
    questions_parser.add_argument("--answers", help="JSON file with answers so far")
    questions_parser.add_argument("--json", action="store_true", help="Output as JSON")

    validate_parser = subparsers.add_parser("validate", help="Check an answers file")
    validate_parser.add_argument("file", help="JSON file with answers")
    validate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    enforce_parser = subparsers.add_parser("enforce", help="Apply time limits to a quest list")
    enforce_parser.add_argument("file", help="JSON list of quests, or {\"quests\": [...]}")
    enforce_parser.add_argument("--budget", type=int, help="Session budget in minutes (default: 90)")

    generate_parser = subparsers.add_parser("generate", help="Generate today's quests")
    generate_parser.add_argument("goal", help="The learner's goal")
    generate_parser.add_argument("--answers", help="JSON file with onboarding answers")
    generate_parser.add_argument("--count", type=int, default=3, help="Quests to ask for (default: 3)")
    generate_parser.add_argument("--provider", choices=["claude", "openai", "mock"], help="AI provider")
    generate_parser.add_argument("--mock", action="store_true", help="Use mock AI (no API key needed)")
    generate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    config = Config.from_env()

    if args.command == "questions":
        return cmd_questions(args)
    if args.command == "validate":
        return cmd_validate(args, config)
    if args.command == "enforce":
        return cmd_enforce(args, config)
    if args.command == "generate":
        return cmd_generate(args, config)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""CLI entrypoint for Rulesmith."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from rulesmith import __version__
from rulesmith.config import RulesmithConfig, load_config
from rulesmith.constants.cli import CLI_DESCRIPTION, EXIT_ERROR, EXIT_FALSE, EXIT_TRUE, YAML_SUFFIXES
from rulesmith.constants.dialects import DIALECT_NAMES
from rulesmith.core.context import Context
from rulesmith.dsl.registry import Dialect, get_dialect
from rulesmith.exceptions import ConfigError, RulesmithError
from rulesmith.exceptions.validation import format_issues

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-c", "--config", type=Path, help="Explicit config file")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(prog="rulesmith", description=CLI_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", parents=[common], help="Validate an expression")
    check.add_argument("-d", "--dialect", choices=DIALECT_NAMES, default=None, help="Grammar of EXPR")
    check.add_argument("expression", metavar="EXPR", help="Rule expression")

    convert = subparsers.add_parser("convert", parents=[common], help="Translate an expression between grammars")
    convert.add_argument("-d", "--dialect", choices=DIALECT_NAMES, default=None, help="Grammar of EXPR")
    convert.add_argument("-t", "--to", choices=DIALECT_NAMES, required=True, help="Target grammar")
    convert.add_argument("expression", metavar="EXPR", help="Rule expression")

    evaluate = subparsers.add_parser("eval", parents=[common], help="Evaluate an expression against facts")
    evaluate.add_argument("-d", "--dialect", choices=DIALECT_NAMES, default=None, help="Grammar of EXPR")
    evaluate.add_argument("expression", metavar="EXPR", help="Rule expression")
    facts_source = evaluate.add_mutually_exclusive_group()
    facts_source.add_argument("--facts", default=None, help="Facts as a JSON object")
    facts_source.add_argument("--facts-file", type=Path, default=None, help="JSON or YAML file of facts")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    try:
        config = load_config(Path.cwd(), args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    try:
        dialect = _dialect(args.dialect, config)
        if args.command == "check":
            return _handle_check(dialect, args.expression)
        if args.command == "convert":
            return _handle_convert(dialect, _dialect(args.to, config), args.expression)
        if args.command == "eval":
            return _handle_eval(dialect, args, config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except RulesmithError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    parser.error(f"Unsupported command: {args.command}")
    return EXIT_ERROR


def _dialect(name: str | None, config: RulesmithConfig) -> Dialect:
    return get_dialect(name or config.dialect, max_depth=config.max_depth, context_radius=config.context_radius)


def _handle_check(dialect: Dialect, expression: str) -> int:
    result = dialect.validate_with_errors(expression)
    if not result.valid:
        print(format_issues(list(result.errors)), file=sys.stderr)
        return EXIT_ERROR
    print("valid")
    return EXIT_TRUE


def _handle_convert(source: Dialect, target: Dialect, expression: str) -> int:
    condition = source.compile(expression)
    print(target.serialize(condition))
    return EXIT_TRUE


def _handle_eval(dialect: Dialect, args: argparse.Namespace, config: RulesmithConfig) -> int:
    facts = _load_facts(args.facts, args.facts_file)
    rule = dialect.to_rule(args.expression)
    result = rule.evaluate(Context(config.merged_facts(facts)))
    logger.debug("Evaluated %s rule to %s", dialect.name, result)
    print("true" if result else "false")
    return EXIT_TRUE if result else EXIT_FALSE


def _load_facts(inline: str | None, path: Path | None) -> dict[str, Any]:
    if inline is None and path is None:
        return {}
    try:
        if path is not None:
            text = path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) if path.suffix.lower() in YAML_SUFFIXES else json.loads(text)
        else:
            data = json.loads(inline or "")
    except OSError as exc:
        raise ConfigError(f"Cannot read facts file {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid facts: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Facts must be a JSON or YAML object")
    return data


if __name__ == "__main__":
    raise SystemExit(main())

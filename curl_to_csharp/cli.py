"""CLI entry point for curl-to-csharp.

Handles argument parsing and dispatches to convert or statements mode.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from curl_to_csharp.config_loader import ConfigError, load_request_options
from curl_to_csharp.converter import convert
from curl_to_csharp.renderer import render, render_expression
from curl_to_csharp.syntax import (
    Assignment,
    Declaration,
    ExpressionCall,
    ScopedBlock,
    Statement,
)


@dataclass
class ConvertArgs:
    """Parsed arguments for convert mode."""

    request: Path
    out: Path | None


@dataclass
class StatementsArgs:
    """Parsed arguments for statements mode."""

    request: Path


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with convert and statements subcommands."""
    parser = argparse.ArgumentParser(
        prog="curl-to-csharp",
        description="Convert a parsed curl request description into C# HttpClient code.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Execution mode")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Generate C# source for a request file",
    )
    convert_parser.add_argument(
        "--request",
        type=Path,
        required=True,
        help="Path to request description file (YAML or JSON)",
    )
    convert_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the generated C# to this file instead of stdout",
    )

    statements_parser = subparsers.add_parser(
        "statements",
        help="Print the statement tree for a request file without rendering it",
    )
    statements_parser.add_argument(
        "--request",
        type=Path,
        required=True,
        help="Path to request description file (YAML or JSON)",
    )

    return parser


def parse_convert_args(namespace: argparse.Namespace) -> ConvertArgs:
    """Convert parsed namespace to ConvertArgs dataclass."""
    return ConvertArgs(request=namespace.request, out=namespace.out)


def parse_statements_args(namespace: argparse.Namespace) -> StatementsArgs:
    """Convert parsed namespace to StatementsArgs dataclass."""
    return StatementsArgs(request=namespace.request)


def parse_args(args: list[str] | None = None) -> ConvertArgs | StatementsArgs:
    """Parse command-line arguments and return typed args dataclass.

    Args:
        args: Command-line arguments to parse. If None, uses sys.argv[1:].

    Returns:
        ConvertArgs or StatementsArgs depending on the subcommand.

    Raises:
        SystemExit: If arguments are invalid (argparse behavior).
    """
    parser = build_parser()
    namespace = parser.parse_args(args)

    if namespace.command == "convert":
        return parse_convert_args(namespace)
    elif namespace.command == "statements":
        return parse_statements_args(namespace)
    else:
        # Should not happen with required=True on subparsers
        parser.error(f"Unknown command: {namespace.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        parsed = parse_args(argv)

        if isinstance(parsed, ConvertArgs):
            return run_convert(parsed)
        else:
            return run_statements(parsed)

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 1


def run_convert(args: ConvertArgs) -> int:
    """Run convert mode: load, convert, render, report warnings."""
    try:
        options = load_request_options(args.request)
    except ConfigError as e:
        print(f"Error loading request: {e}", file=sys.stderr)
        return 1

    result = convert(options)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    source = render(result)
    if args.out is None:
        sys.stdout.write(source)
    else:
        args.out.write_text(source, encoding="utf-8")
        print(f"Wrote {args.out}", file=sys.stderr)

    return 0


def run_statements(args: StatementsArgs) -> int:
    """Run statements mode: print one line per statement node."""
    try:
        options = load_request_options(args.request)
    except ConfigError as e:
        print(f"Error loading request: {e}", file=sys.stderr)
        return 1

    result = convert(options)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    for line in format_outline(result.statements):
        print(line)

    return 0


def format_outline(statements: tuple[Statement, ...], depth: int = 0) -> list[str]:
    """Describe each statement on one line, indented by nesting depth."""
    lines = []
    prefix = "  " * depth
    for statement in statements:
        if isinstance(statement, Declaration):
            lines.append(
                f"{prefix}Declaration {statement.name} = {render_expression(statement.initializer)}"
            )
        elif isinstance(statement, Assignment):
            lines.append(
                f"{prefix}Assignment {render_expression(statement.target)}.{statement.member}"
                f" = {render_expression(statement.value)}"
            )
        elif isinstance(statement, ExpressionCall):
            path = ".".join((render_expression(statement.receiver), *statement.member_path))
            args = ", ".join(render_expression(a) for a in statement.args)
            lines.append(f"{prefix}ExpressionCall {path}({args})")
        elif isinstance(statement, ScopedBlock):
            args = ", ".join(render_expression(a) for a in statement.constructor_args)
            lines.append(f"{prefix}ScopedBlock {statement.bound_name}: {statement.type_name}({args})")
            lines.extend(format_outline(statement.body, depth + 1))
    return lines


if __name__ == "__main__":
    sys.exit(main())

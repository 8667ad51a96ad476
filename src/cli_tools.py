import argparse
import json
import logging
import sys
from typing import Any

from src.config.settings import settings
from src.container import container
from src.exceptions import ToolError


def _print_pretty(name: str, result: dict[str, Any]) -> None:
    from rich import box
    from rich.console import Console
    from rich.panel import Panel
    from rich.syntax import Syntax
    from rich.text import Text

    console = Console(soft_wrap=True)
    ok = result.get("status") == "ok"
    message = result.get("message") or ""
    if message.startswith("Strategy: "):
        body = Syntax(message, "diff")
    else:
        body = Text(message)
    console.print(
        Panel(
            body,
            title=name,
            subtitle=result.get("strategy") or result.get("kind") or "",
            box=box.ROUNDED,
            border_style="green" if ok else "red",
            expand=True,
        )
    )
    if result.get("suggestion"):
        console.print(Text(f"Suggestion: {result['suggestion']}", style="yellow"))
    if result.get("details"):
        console.print_json(data=result["details"])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="surgical-fs-tools",
        description="Run one surgical edit tool and print its structured result.",
    )
    parser.add_argument("--tool", help="Tool name, e.g. surgical.edit")
    parser.add_argument(
        "--args",
        default="{}",
        help="Tool arguments as a JSON object",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available tools and exit",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print output with colors",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    handler = container.get_edit_tools_handler()
    if args.list:
        for spec in handler.available_tools():
            print(f"{spec['name']}: {spec['description']}")
        return 0
    if not args.tool:
        parser.error("--tool is required unless --list is given")

    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as e:
        print(f"Invalid --args JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("--args must be a JSON object", file=sys.stderr)
        return 2

    try:
        raw = handler.dispatch(args.tool, arguments)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ToolError as e:
        print(str(e), file=sys.stderr)
        return 2

    result: dict[str, Any] = json.loads(raw)
    if args.pretty:
        _print_pretty(args.tool, result)
    else:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0 if result.get("status") == "ok" else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

#!/usr/bin/env python3
"""
TODO TOOL - CLI Interface
=========================
Command-line tool exposing the task list to an external caller.

Usage:
    todo-tool discover
    todo-tool ListTasks
    echo '{"tasks_text": "Buy milk\\nWalk dog"}' | todo-tool SetTasks
    echo '{"active_task_id": {"index": 0, "text_prefix": "Buy"}}' | todo-tool UpdateTaskStates
"""

import argparse
import json
import logging
import sys
from typing import Optional, List, Dict, Any, TextIO

from .errors import TodoToolError, UnknownCommand, MalformedInput
from .manager import TodoManager, DEFAULT_TODO_FILE
from .schema import TOOL_DEFINITIONS, DISCOVER_COMMAND, COMMAND_NAMES

logger = logging.getLogger("todo_tool")


def read_params(stream: TextIO) -> Dict[str, Any]:
    """Read the JSON parameter object; empty input means {}"""
    raw = stream.read()
    if not raw.strip():
        return {}

    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Parameters are not valid JSON: {e}") from e

    if not isinstance(params, dict):
        raise MalformedInput(
            f"Parameters must be a JSON object, got {type(params).__name__}"
        )
    return params


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Todo Tool - persistent task list for agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Commands:
  {DISCOVER_COMMAND:<20} Print the JSON schema of the available tools
  {COMMAND_NAMES[0]:<20} Show the task list
  {COMMAND_NAMES[1]:<20} Replace the task list (params: tasks_text)
  {COMMAND_NAMES[2]:<20} Update completion and the active task

Parameters are read as a JSON object from stdin.
        """
    )
    parser.add_argument("command", nargs="?", help="Tool name, or 'discover'")
    parser.add_argument("--file", default=DEFAULT_TODO_FILE, help="Task list JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command == DISCOVER_COMMAND:
        print(json.dumps(TOOL_DEFINITIONS, indent=2))
        return 0

    manager = TodoManager(todo_file=args.file)

    try:
        params = read_params(sys.stdin)
        output = manager.dispatch(args.command, params)
    except UnknownCommand as e:
        print(str(e), file=sys.stderr)
        return 1
    except TodoToolError as e:
        print(f"Tool execution failed: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception(f"Unexpected failure in {args.command}")
        print(f"Tool execution failed: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Blocking I/O checker.

Finds blocking file-system calls made directly inside async functions, which
would stall the event loop while a large upload is written or verified.

Calls inside nested synchronous functions are not reported, since those are
meant to be handed to a threadpool or worker.

Usage:
    python scripts/check_blocking_io.py drawguard/api
    python scripts/check_blocking_io.py --json drawguard/api/routes/imports.py
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

# --- Configuration ---

BLOCKING_CALLS: frozenset[str] = frozenset(
    [
        "open",
        "os.remove",
        "os.unlink",
        "os.rename",
        "os.replace",
        "os.makedirs",
        "os.mkdir",
        "os.path.exists",
        "os.path.getsize",
        "shutil.copy",
        "shutil.copy2",
        "shutil.copyfile",
        "shutil.copyfileobj",
        "shutil.move",
        "shutil.rmtree",
        "sqlite3.connect",
        "time.sleep",
    ]
)

# Path methods that touch the file system, matched on any receiver
BLOCKING_METHODS: frozenset[str] = frozenset(
    [
        "read_text",
        "read_bytes",
        "write_text",
        "write_bytes",
        "unlink",
        "mkdir",
        "rmdir",
        "exists",
        "stat",
    ]
)


@dataclass(frozen=True)
class BlockingCall:
    """A blocking call found inside an async function."""

    filename: str
    line: int
    function: str
    call: str


# --- Analysis ---


def dotted_name(node: ast.expr) -> str | None:
    """Name of a called expression such as os.path.exists, if it is static."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        base = dotted_name(node.value)
        return f"{base}.{node.attr}" if base else node.attr
    return None


class _AsyncBodyVisitor(ast.NodeVisitor):
    def __init__(self, filename: str, function: str) -> None:
        self.filename = filename
        self.function = function
        self.found: list[BlockingCall] = []

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        # Nested sync functions run elsewhere (threadpool, executor)
        return

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        # Reported separately by the module-level walk
        return

    def visit_Lambda(self, node: ast.Lambda) -> None:
        return

    def visit_Call(self, node: ast.Call) -> None:
        name = dotted_name(node.func)
        if name is not None:
            method = name.rsplit(".", 1)[-1]
            if name in BLOCKING_CALLS or ("." in name and method in BLOCKING_METHODS):
                self.found.append(
                    BlockingCall(
                        filename=self.filename,
                        line=node.lineno,
                        function=self.function,
                        call=name,
                    )
                )
        self.generic_visit(node)


def find_blocking_calls(source: str, filename: str = "<string>") -> list[BlockingCall]:
    """Find blocking calls made directly in the body of any async function."""
    tree = ast.parse(source, filename=filename)
    found: list[BlockingCall] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.AsyncFunctionDef):
            visitor = _AsyncBodyVisitor(filename, node.name)
            for statement in node.body:
                visitor.visit(statement)
            found.extend(visitor.found)

    return sorted(found, key=lambda call: (call.filename, call.line))


def iter_python_files(paths: list[Path]) -> list[Path]:
    """Expand directories into the Python files they contain."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob("*.py")))
        else:
            files.append(path)
    return files


def check_paths(paths: list[Path]) -> list[BlockingCall]:
    """Check every Python file under the given paths."""
    found: list[BlockingCall] = []
    for file in iter_python_files(paths):
        found.extend(find_blocking_calls(file.read_text(encoding="utf-8"), str(file)))
    return found


# --- CLI ---


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find blocking I/O inside async functions")
    parser.add_argument("paths", nargs="+", type=Path, help="Files or directories to check")
    parser.add_argument("--json", action="store_true", help="Print findings as JSON")
    args = parser.parse_args(argv)

    found = check_paths(args.paths)

    if args.json:
        print(json.dumps([asdict(call) for call in found], indent=2))
    elif found:
        print(f"Found {len(found)} blocking call(s) in async functions:")
        for call in found:
            print(f"  {call.filename}:{call.line} {call.function}() calls {call.call}")
    else:
        print("No blocking calls in async functions")

    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())

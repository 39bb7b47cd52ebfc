#!/usr/bin/env python
"""Repository policy checks for the notelink package.

Checks (top-level statements only, stdlib ``ast``):
- classes: at most one non-dataclass class per module
- exports: ``__all__`` is assigned once, as the last statement
- singletons: no lazy module-level instance holders or ``get_instance`` helpers
- length: at most 300 code lines per module (blank, comment and docstring lines excluded)

Exit status is 1 when any check reports a violation.
"""

from __future__ import annotations

import ast
import sys
import argparse
import tokenize
from pathlib import Path
from collections.abc import Callable

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "notelink"
MAX_CODE_LINES = 300
SINGLETON_FN_NAMES = {"get_instance", "reset_instance"}

Check = Callable[[Path, ast.Module], list[str]]


def _is_dataclass(node: ast.ClassDef) -> bool:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        name = target.attr if isinstance(target, ast.Attribute) else getattr(target, "id", "")
        if name == "dataclass":
            return True
    return False


def check_classes(path: Path, tree: ast.Module) -> list[str]:
    names = [n.name for n in tree.body if isinstance(n, ast.ClassDef) and not _is_dataclass(n)]
    if len(names) <= 1:
        return []
    return [f"{len(names)} non-dataclass classes ({', '.join(names)})"]


def _assigns_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return isinstance(node.target, ast.Name) and node.target.id == "__all__"
    return False


def check_exports(path: Path, tree: ast.Module) -> list[str]:
    positions = [i for i, node in enumerate(tree.body) if _assigns_all(node)]
    if not positions:
        return []
    if len(positions) > 1:
        return ["__all__ assigned more than once"]
    if positions[0] != len(tree.body) - 1:
        return [f"__all__ at line {tree.body[positions[0]].lineno} is not the last statement"]
    return []


def check_singletons(path: Path, tree: ast.Module) -> list[str]:
    found: list[str] = []
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            found.append(f"line {node.lineno}: function `{node.name}` implies a process-wide instance")
        if isinstance(node, ast.Assign) and isinstance(node.value, ast.Constant) and node.value.value is None:
            for target in node.targets:
                if isinstance(target, ast.Name) and target.id.lower().endswith("_instance"):
                    found.append(f"line {node.lineno}: lazy instance holder `{target.id}`")
    return found


def _non_code_lines(path: Path, tree: ast.Module) -> set[int]:
    skipped: set[int] = set()
    with path.open("rb") as fh:
        for tok in tokenize.tokenize(fh.readline):
            if tok.type == tokenize.COMMENT:
                skipped.add(tok.start[0])
    for node in ast.walk(tree):
        body = getattr(node, "body", None)
        if not isinstance(body, list) or not body:
            continue
        first = body[0]
        if isinstance(first, ast.Expr) and isinstance(first.value, ast.Constant) and isinstance(first.value.value, str):
            skipped.update(range(first.lineno, (first.end_lineno or first.lineno) + 1))
    return skipped


def check_length(path: Path, tree: ast.Module) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    skipped = _non_code_lines(path, tree)
    count = sum(1 for no, line in enumerate(lines, start=1) if line.strip() and no not in skipped)
    if count <= MAX_CODE_LINES:
        return []
    return [f"{count} code lines (limit {MAX_CODE_LINES})"]


CHECKS: dict[str, Check] = {
    "classes": check_classes,
    "exports": check_exports,
    "singletons": check_singletons,
    "length": check_length,
}


def run(paths: list[Path], selected: list[str]) -> list[str]:
    violations: list[str] = []
    for path in paths:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, UnicodeDecodeError, SyntaxError) as exc:
            violations.append(f"  {path}: unreadable ({exc})")
            continue
        rel = path.relative_to(ROOT) if path.is_relative_to(ROOT) else path
        for name in selected:
            violations.extend(f"  {rel}: [{name}] {msg}" for msg in CHECKS[name](path, tree))
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--check", action="append", choices=sorted(CHECKS), help="run only these checks")
    parser.add_argument("roots", nargs="*", type=Path, default=[PACKAGE_DIR], help="directories to scan")
    args = parser.parse_args()

    paths = sorted(p for root in args.roots for p in root.rglob("*.py"))
    violations = run(paths, args.check or list(CHECKS))
    if violations:
        print("Policy violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Fail if core imports the HTTP stack or the layers built on top of it.
Checks all Python files under src/webtrends_sdk/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "webtrends_sdk" / "core"
CORE_PACKAGE = "webtrends_sdk.core"

FORBIDDEN_PREFIXES = (
    "httpx",
    "respx",
    "webtrends_sdk.client",
    "webtrends_sdk.api",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def resolve(module: str, level: int) -> str:
    """Turn a relative ``from`` import into an absolute module name."""
    if level == 0:
        return module
    parts = CORE_PACKAGE.split(".")
    base = parts[: len(parts) - (level - 1)]
    return ".".join(base + ([module] if module else []))


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if is_forbidden(alias.name):
                    errors.append(f"{path}: forbidden import '{alias.name}'")
        elif isinstance(node, ast.ImportFrom):
            mod = resolve(node.module or "", node.level)
            if mod and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

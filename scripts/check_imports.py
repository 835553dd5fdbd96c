#!/usr/bin/env python3
"""Enforce the A-Frame layering of src/.

Each top-level package under src/ is a layer. A file may import from its
own layer and from the layers listed for it in ALLOWED_IMPORTS; anything
else is reported. The domain layer additionally may not import a module
that reaches the outside world (see EFFECTFUL_MODULES), which keeps value
objects and domain logic free of I/O.

Usage:
    python scripts/check_imports.py [src_directory]

Exit codes:
    0: Clean
    1: At least one violation
"""
import ast
import sys
from pathlib import Path
from typing import NamedTuple

# Depth of each layer; a layer may only depend on shallower ones
LAYER_HIERARCHY: dict[str, int] = {
    "domain": 0,
    "config": 1,
    "infrastructure": 2,
    "application": 3,
}

ALLOWED_IMPORTS: dict[str, set[str]] = {
    layer: {other for other, depth in LAYER_HIERARCHY.items() if depth < own}
    for layer, own in LAYER_HIERARCHY.items()
}

# Network, disk, clock, randomness and process access
EFFECTFUL_MODULES: frozenset[str] = frozenset(
    {
        "asyncio",
        "httpx",
        "os",
        "pathlib",
        "random",
        "shutil",
        "socket",
        "subprocess",
        "tempfile",
        "threading",
        "time",
        "urllib.request",
    }
)


class Violation(NamedTuple):
    path: str
    line: int
    message: str


def get_import_module(node: ast.Import | ast.ImportFrom) -> str | None:
    """Module an import statement names; None for ``from . import x``."""
    if isinstance(node, ast.ImportFrom):
        return node.module
    return node.names[0].name if node.names else None


def _imported_modules(node: ast.Import | ast.ImportFrom) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    return [node.module] if node.module else []


def _layer_of(py_file: Path, src_dir: Path) -> str | None:
    try:
        top = py_file.relative_to(src_dir).parts[0]
    except (ValueError, IndexError):
        return None
    return top if top in LAYER_HIERARCHY else None


def _is_effectful(module: str) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in EFFECTFUL_MODULES)


def _target_layer(module: str) -> str | None:
    package, _, rest = module.partition(".")
    if package != "src" or not rest:
        return None
    layer = rest.split(".", 1)[0]
    return layer if layer in LAYER_HIERARCHY else None


def _rule_broken(module: str, layer: str) -> str | None:
    if layer == "domain" and _is_effectful(module):
        return f"domain layer cannot import effectful module {module}"
    target = _target_layer(module)
    if target is None or target == layer or target in ALLOWED_IMPORTS[layer]:
        return None
    return f"{layer} layer cannot import from {target}"


class _ImportVisitor(ast.NodeVisitor):
    """Collects boundary violations for one file of a known layer."""

    def __init__(self, path: str, layer: str) -> None:
        self.path = path
        self.layer = layer
        self.violations: list[Violation] = []

    def _check(self, node: ast.Import | ast.ImportFrom) -> None:
        for module in _imported_modules(node):
            message = _rule_broken(module, self.layer)
            if message:
                self.violations.append(Violation(self.path, node.lineno, message))

    visit_Import = _check
    visit_ImportFrom = _check


def check_file_imports(py_file: Path, src_dir: Path) -> list[Violation]:
    """Violations in one file; files outside a layer or unparsable yield none."""
    layer = _layer_of(py_file, src_dir)
    if layer is None:
        return []
    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as exc:
        print(f"Warning: skipping {py_file}: {exc}", file=sys.stderr)
        return []

    visitor = _ImportVisitor(str(py_file), layer)
    visitor.visit(tree)
    return visitor.violations


def check_import_boundaries(src_dir: Path) -> list[Violation]:
    """Violations across every ``*.py`` file below ``src_dir``."""
    if not src_dir.exists():
        print(f"Error: Source directory '{src_dir}' does not exist", file=sys.stderr)
        return []
    return [
        violation
        for py_file in sorted(src_dir.rglob("*.py"))
        for violation in check_file_imports(py_file, src_dir)
    ]


def format_violations(violations: list[Violation]) -> str:
    if not violations:
        return ""
    body = [f"  {path}:{line}: {message}" for path, line, message in sorted(violations)]
    return "\n".join(
        ["Import boundary violations found:", "", *body, "", f"Total: {len(violations)} violation(s)"]
    )


def main() -> int:
    src_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / "src"
    violations = check_import_boundaries(src_dir)
    if violations:
        print(format_violations(violations))
        return 1
    print("No import boundary violations found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Reject direct outside-world calls made outside the infrastructure wrappers.

Only src/infrastructure/adapters/ may read the clock, sleep, open files or
create HTTP clients. Everything else goes through a wrapper so that
``create_null`` can replace the effect with an embedded stub.

Usage:
    python scripts/check_ambient_effects.py [src_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""

import re
import sys
from pathlib import Path

# Pattern name -> regex for a direct effect
EFFECT_PATTERNS: dict[str, re.Pattern[str]] = {
    "datetime.now": re.compile(r"datetime\s*\.\s*(now|utcnow|today)\s*\("),
    "time.time": re.compile(r"\btime\s*\.\s*(time|monotonic|perf_counter|sleep)\s*\("),
    "asyncio.sleep": re.compile(r"asyncio\s*\.\s*sleep\s*\("),
    "open": re.compile(r"(?<![\w.])open\s*\("),
    "pathlib": re.compile(r"\b(Path|PurePath|PurePosixPath)\s*\("),
    "httpx client": re.compile(r"httpx\s*\.\s*(AsyncClient|Client|get|post|put|delete)\s*\("),
}

# The only directory allowed to perform effects directly
ALLOWED_DIR = ("infrastructure", "adapters")


def check_file(file_path: Path) -> list[tuple[int, str, str]]:
    """Check a single file for direct effects.

    Args:
        file_path: Path to the Python file to check.

    Returns:
        List of (line_number, pattern_name, line_content) tuples.
    """
    violations: list[tuple[int, str, str]] = []

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return violations

    for line_num, line in enumerate(content.splitlines(), start=1):
        stripped = line.lstrip()
        if stripped.startswith("#"):
            continue
        for name, pattern in EFFECT_PATTERNS.items():
            if pattern.search(line):
                violations.append((line_num, name, stripped))

    return violations


def is_allowed(py_file: Path, src_dir: Path) -> bool:
    """Return True for files inside src/infrastructure/adapters/."""
    try:
        parts = py_file.relative_to(src_dir).parts
    except ValueError:
        return False
    return parts[: len(ALLOWED_DIR)] == ALLOWED_DIR


def check_src(src_dir: Path) -> dict[str, list[tuple[int, str, str]]]:
    """Check every non-adapter file under ``src_dir``.

    Args:
        src_dir: Path to the src directory.

    Returns:
        Violations by file path.
    """
    all_violations: dict[str, list[tuple[int, str, str]]] = {}
    for py_file in sorted(src_dir.rglob("*.py")):
        if is_allowed(py_file, src_dir):
            continue
        violations = check_file(py_file)
        if violations:
            all_violations[str(py_file)] = violations
    return all_violations


def main() -> int:
    """Main entry point.

    Returns:
        Exit code: 0 for success, 1 for violations found.
    """
    src_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / "src"

    all_violations = check_src(src_dir)
    if not all_violations:
        print("No direct effects outside src/infrastructure/adapters/")
        return 0

    print("Direct effects found outside infrastructure wrappers:")
    print()
    for file_path, violations in all_violations.items():
        print(f"  {file_path}:")
        for line_num, name, line_content in violations:
            print(f"    Line {line_num} ({name}): {line_content}")
        print()

    print("How to fix:")
    print("  Inject the matching wrapper (Clock, FileSystem, HttpClient) and call it.")
    return 1


if __name__ == "__main__":
    sys.exit(main())

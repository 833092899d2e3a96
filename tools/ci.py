#!/usr/bin/env python3
# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, tests, a smoke scan, and build."""

import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=tinyscan", "--cov-report=term-missing"]),
    ("Smoke scan", ["uv", "run", "tinyscan", "check", "docs/examples/factorial.tiny"]),
    ("Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps (all by default) and report results."""
    selected = set(argv if argv is not None else sys.argv[1:])
    steps = [(name, cmd) for name, cmd in STEPS if not selected or _slug(name) in selected]
    if not steps:
        print(chalk.red(f"No CI step matches: {', '.join(sorted(selected))}"))
        return 2

    results: list[tuple[str, bool, float]] = []
    for name, cmd in steps:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    for name, passed, elapsed in results:
        status = "PASS" if passed else "FAIL"
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _slug(name: str) -> str:
    """Turn a step name such as 'Format check' into 'format-check'."""
    return name.lower().replace(" ", "-")


def _repo_root() -> str:
    return str(pathlib.Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())

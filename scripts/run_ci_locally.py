#!/usr/bin/env python3
"""
Run the contact_locale checks locally in the ACTIVE virtual environment.

Steps:
  1) uv sync --all-extras  [--frozen if uv.lock exists]
  2) black --check --line-length 120 on the package, tests and scripts
  3) mypy on the package
  4) pytest tests/ with coverage of contact_locale
"""

import os
import shutil
import subprocess
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parent.parent
PACKAGE = "contact_locale"
BLACK_TARGETS = [PACKAGE, "tests", "scripts"]
COVERAGE_FLOOR = 85


def uv() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path is None:
        print("ERROR: 'uv' not found. Install uv first.", file=sys.stderr)
        sys.exit(2)
    return [uv_path]


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def main() -> None:
    sync_args = ["sync", "--active", "--all-extras"]
    if (REPO / "uv.lock").exists():
        sync_args.append("--frozen")
    run(uv() + sync_args)

    run(uv() + ["run", "--active", "black", *BLACK_TARGETS, "--check", "--line-length", "120"])
    run(uv() + ["run", "--active", "mypy", PACKAGE, "--ignore-missing-imports"])

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv()
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            f"--cov={PACKAGE}",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ],
        env=env,
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)

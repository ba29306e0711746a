#!/usr/bin/env python3
"""Remove build artifacts, caches and simulator saves from the project tree."""

import argparse
import shutil
import sys
from pathlib import Path
from typing import Iterable, List

PROJECT_ROOT = Path(__file__).resolve().parent
SAVES_DIR = "saves"


def ensure_safe_root(root: Path) -> None:
    """Refuse to run anywhere but the cup-manager project root."""
    pyproject = root / "pyproject.toml"
    if not pyproject.exists() or "cup-manager" not in pyproject.read_text(encoding="utf-8"):
        print("Error: clean.py must be run on the cup-manager project root.")
        sys.exit(1)


def collect_targets(root: Path, include_saves: bool) -> List[Path]:
    targets: List[Path] = [root / "build", root / "dist"]
    targets += root.glob("*.egg-info")
    targets += (root / "src").glob("*.egg-info")
    targets += root.rglob("__pycache__")
    targets += (p for p in root.rglob("*.py[co]") if "__pycache__" not in p.parts)
    targets += [root / ".pytest_cache", root / ".mypy_cache", root / ".coverage"]
    if include_saves:
        # Cups written by `cup-test simulate --output saves/<name>`
        targets.append(root / SAVES_DIR)
    return [path for path in targets if path.exists()]


def remove_paths(paths: Iterable[Path], dry_run: bool) -> int:
    failures = 0
    for path in paths:
        if dry_run:
            print(f"Would remove: {path}")
            continue
        try:
            if path.is_dir():
                shutil.rmtree(path)
                print(f"Removed directory: {path}")
            else:
                path.unlink(missing_ok=True)
                print(f"Removed file: {path}")
        except OSError as e:
            print(f"Failed to remove {path}: {e}")
            failures += 1
    return failures


def main() -> int:
    parser = argparse.ArgumentParser(description="Clean the cup-manager project tree")
    parser.add_argument("--dry-run", action="store_true", help="List what would be removed")
    parser.add_argument(
        "--saves", action="store_true", help=f"Also remove the {SAVES_DIR}/ directory"
    )
    args = parser.parse_args()

    ensure_safe_root(PROJECT_ROOT)
    print(f"Cleaning project at: {PROJECT_ROOT}")
    print("-" * 40)
    failures = remove_paths(collect_targets(PROJECT_ROOT, args.saves), args.dry_run)
    print("-" * 40)
    print("Clean complete." if not failures else f"Clean finished with {failures} failure(s).")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

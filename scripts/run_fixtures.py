#!/usr/bin/env python3
"""
pdef Fixture Runner

Runs the pdef syntax checker over every sample program in the fixtures
directory and compares its output with the recorded expectation.

Each fixture ``tNN_name.pdef`` has a sibling ``tNN_name.expected.txt`` holding
the exact stdout of ``python -m pdef parse tNN_name.pdef``.

Usage:
    python run_fixtures.py [options]

Examples:
    python run_fixtures.py
    python run_fixtures.py --verbose --fail-fast
    python run_fixtures.py --fixtures-dir ./custom_fixtures
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureResult:
    """Represents the result of a single fixture."""
    name: str
    passed: bool
    expected_output: str = ""
    actual_output: str = ""
    error_message: str = ""

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {self.name}"


@dataclass
class FixtureSuite:
    """Manages a collection of fixture results."""
    results: list[FixtureResult] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    def add_result(self, result: FixtureResult) -> None:
        self.results.append(result)

    def print_summary(self) -> None:
        """Print a summary of all fixture results."""
        print("\n" + "=" * 50)
        print(f"Fixture Summary: {self.passed_count} passed, {self.failed_count} failed")
        print("=" * 50)

        if self.failed_count > 0:
            print("\nFailed fixtures:")
            for result in self.results:
                if not result.passed:
                    print(f"  - {result.name}: {result.error_message}")


class FixtureRunner:
    """
    Discovers fixtures, runs the checker on each and compares output.
    """

    def __init__(self, fixtures_dir: Path, verbose: bool = False, fail_fast: bool = False) -> None:
        """
        Initialize the fixture runner.

        Args:
            fixtures_dir: Directory containing .pdef fixtures
            verbose: Show expected and actual output on mismatch
            fail_fast: Stop on first failure
        """
        self.fixtures_dir = fixtures_dir.resolve()
        self.verbose = verbose
        self.fail_fast = fail_fast
        self.suite = FixtureSuite()

        if self.verbose:
            logger.setLevel(logging.DEBUG)

    def discover_fixtures(self) -> Iterator[Path]:
        """
        Discover all fixture programs.

        Yields:
            Paths to ``t*.pdef`` files, sorted by name
        """
        if not self.fixtures_dir.exists():
            raise FileNotFoundError(f"Fixtures directory not found: {self.fixtures_dir}")

        fixtures = sorted(self.fixtures_dir.glob("t*.pdef"))
        if not fixtures:
            raise ValueError(f"No fixtures found in {self.fixtures_dir}")

        logger.debug(f"Discovered {len(fixtures)} fixtures")
        yield from fixtures

    def normalize_output(self, text: str) -> str:
        """Convert CRLF to LF and trim trailing whitespace."""
        return text.replace("\r\n", "\n").rstrip()

    def run_checker(self, fixture: Path) -> str:
        """
        Run ``python -m pdef parse`` on a fixture.

        Returns:
            Captured stdout
        """
        cmd = [sys.executable, "-m", "pdef", "parse", str(fixture)]
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=30)
        if result.stderr:
            logger.debug(result.stderr.rstrip())
        return result.stdout

    def run_single_fixture(self, fixture: Path) -> FixtureResult:
        name = fixture.stem
        expected_file = self.fixtures_dir / f"{name}.expected.txt"

        print(f"\n==> [fixture] {name}")

        if not expected_file.exists():
            return FixtureResult(name=name, passed=False,
                                 error_message=f"Missing expected file: {expected_file}")

        try:
            actual = self.normalize_output(self.run_checker(fixture))
        except subprocess.SubprocessError as e:
            logger.error(f"Checker subprocess error for {name}: {e}")
            return FixtureResult(name=name, passed=False, error_message=str(e))

        expected = self.normalize_output(expected_file.read_text(encoding="utf-8"))

        if actual == expected:
            print(f"[fixture] PASS: {name}")
            return FixtureResult(name=name, passed=True,
                                 expected_output=expected, actual_output=actual)

        print(f"[fixture] FAIL: {name}")
        if self.verbose:
            print("---- expected ----")
            print(expected)
            print("---- actual ----")
            print(actual)
        return FixtureResult(name=name, passed=False, expected_output=expected,
                             actual_output=actual, error_message="Output mismatch")

    def run_all(self) -> int:
        """
        Run all discovered fixtures.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        print("=" * 50)
        print("pdef Fixture Runner")
        print("=" * 50)
        print(f"Fixtures directory: {self.fixtures_dir}")

        try:
            fixtures = list(self.discover_fixtures())
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Fixture discovery failed: {e}")
            return 1

        print(f"\nFound {len(fixtures)} fixture(s)")

        for fixture in fixtures:
            result = self.run_single_fixture(fixture)
            self.suite.add_result(result)

            if not result.passed and self.fail_fast:
                logger.info("Fail-fast enabled, stopping after first failure")
                break

        self.suite.print_summary()
        return 0 if self.suite.failed_count == 0 else 1


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="run_fixtures.py",
        description="Run pdef fixture programs",
    )
    parser.add_argument(
        "--fixtures-dir",
        type=Path,
        default=None,
        help="Directory containing fixtures (default: ../tests/fixtures)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--fail-fast", "-x",
        action="store_true",
        help="Stop on first failure"
    )
    return parser.parse_args()


def main() -> int:
    args = parse_arguments()
    repo_root = Path(__file__).parent.resolve().parent
    fixtures_dir = args.fixtures_dir or repo_root / "tests" / "fixtures"

    runner = FixtureRunner(
        fixtures_dir=fixtures_dir,
        verbose=args.verbose,
        fail_fast=args.fail_fast
    )
    return runner.run_all()


if __name__ == "__main__":
    sys.exit(main())

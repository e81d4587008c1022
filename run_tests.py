#!/usr/bin/env python3
"""
Test runner script for the kyuubi configuration package.
Provides convenient ways to run different test suites.
"""

import sys
import subprocess
import argparse


def run_command(cmd, description):
    """Run a command and handle the output."""
    print(f"\n🔄 {description}")
    print(f"Running: {' '.join(cmd)}")
    print("-" * 50)

    try:
        subprocess.run(cmd, check=True, capture_output=False)
        print(f"✅ {description} completed successfully")
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Test runner for kyuubi")
    parser.add_argument(
        "suite",
        nargs="?",
        default="all",
        choices=["all", "unit", "concurrency", "config", "coverage"],
        help="Test suite to run"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--failfast", "-x", action="store_true", help="Stop on first failure")
    parser.add_argument("--markers", "-m", help="Run tests with specific markers")
    parser.add_argument("--pattern", "-k", help="Run tests matching pattern")

    args = parser.parse_args()

    # Base pytest command
    base_cmd = [sys.executable, "-m", "pytest"]

    # Add common options
    if args.verbose:
        base_cmd.append("-v")
    if args.failfast:
        base_cmd.append("-x")
    if args.markers:
        base_cmd.extend(["-m", args.markers])
    if args.pattern:
        base_cmd.extend(["-k", args.pattern])

    # Define test suites
    test_suites = {
        "all": {
            "cmd": base_cmd + ["test/"],
            "desc": "Running all tests"
        },
        "unit": {
            "cmd": base_cmd + ["test/", "-m", "not concurrency"],
            "desc": "Running unit tests"
        },
        "concurrency": {
            "cmd": base_cmd + ["test/", "-m", "concurrency"],
            "desc": "Running concurrency tests"
        },
        "config": {
            "cmd": base_cmd + ["test/test_config/"],
            "desc": "Running configuration tests"
        },
        "coverage": {
            "cmd": base_cmd + ["test/", "--cov=kyuubi", "--cov-report=html", "--cov-report=term-missing"],
            "desc": "Running tests with coverage"
        }
    }

    suite_config = test_suites[args.suite]
    success = run_command(suite_config["cmd"], suite_config["desc"])

    if not success:
        sys.exit(1)

    print(f"\n🎉 Test suite '{args.suite}' completed successfully!")


if __name__ == "__main__":
    main()

"""
End-to-End Demo: Phrasebook on TodoMVC

Runs examples/features/todomvc.feature with behave against the
Playwright TodoMVC demo site, headed so you can watch it.
"""

import os
import sys

from behave.__main__ import main as behave_main

FEATURES_DIR = os.path.join(os.path.dirname(__file__), "features")


def main():
    print("=" * 60)
    print("📖  PHRASEBOOK - TodoMVC Demo")
    print("=" * 60)

    exit_code = behave_main([
        FEATURES_DIR,
        "-D", "headless=false",
        "-D", "version=demo",
        "-D", "report_dir=./phrasebook_reports",
    ])

    print()
    print("✅ SUCCESS!" if exit_code == 0 else "❌ Some scenarios failed")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

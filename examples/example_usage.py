"""Example: drive the service layer directly (no Flask).

Generates the draft payroll of a period and prints one line per employee.
Usage: python examples/example_usage.py 2025-01
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_payroll.attendance_payroll.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    period = sys.argv[1] if len(sys.argv) > 1 else "2025-01"
    run = container.payroll_runner.generate(period)
    for r in run.records:
        flag = "  <- NEGATIVE" if r.is_negative_net else ""
        print(f"{r.user_id:>5} {r.basic_salary:>12} {r.overtime_pay:>10} {-r.total_deductions:>10} {r.total_net:>12}{flag}")
    for w in run.warnings:
        print(f"warning: {w.code} {w.message}")
    if run.skipped_finalized:
        print(f"skipped (final): {run.skipped_finalized}")


if __name__ == "__main__":
    main()

"""Monthly paid-leave credit.

Run once a month from cron (or any scheduler): every Employee account gets
one more paid leave day. There is no cap, unused days carry over.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_attendance.hr_attendance.container import build_container
from src.hr_attendance.hr_attendance.core.enums import Role


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    updated = container.leave_service.monthly_reset(current_role=Role.ADMIN)
    print(f"OK: Paid leave credited to {updated} employee(s)")


if __name__ == "__main__":
    main()

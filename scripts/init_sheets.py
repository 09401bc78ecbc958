from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.org_console.org_console.container import build_container
from src.org_console.org_console.core.enums import Role


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(gas_config=settings.GAS_CONFIG, org_config=settings.ORG_CONFIG)

    if not container.events_client.is_configured():
        print("GAS_EVENTS_API_URL is not set; nothing to initialize")
        sys.exit(1)

    result = container.event_service.initialize_sheets(current_role=Role.ADMIN)
    print(f"OK: Events sheets ready -> {result.get('spreadsheetUrl') or result.get('spreadsheetId')}")


if __name__ == "__main__":
    main()

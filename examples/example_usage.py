"""Example: use the service layer without Flask.

Controllers stay thin; the use cases live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.org_console.org_console.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(gas_config=settings.GAS_CONFIG, org_config=settings.ORG_CONFIG)
    for event in container.dashboard_service.dashboard_events()[:5]:
        print(event.event_id, event.title, container.event_service.display_date(event), event.status)


if __name__ == "__main__":
    main()

"""Example: use the service layer without Flask.

Controllers are thin; the use cases live in services wired by the container.
"""

import importlib

from dotenv import load_dotenv

from klas_api.config import get_settings_module
from klas_api.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    print(container.schedule_service.today_schedule())
    print(container.schedule_service.ongoing())


if __name__ == "__main__":
    main()

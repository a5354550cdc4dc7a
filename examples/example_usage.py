"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from datetime import timedelta

from werkzeug.security import generate_password_hash

from hr_portal.config import get_settings_module
from hr_portal.container import build_container
from hr_portal.store.seed import load_seed


def main():
    settings = importlib.import_module(get_settings_module())
    config = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}
    container = build_container(config)
    today = container.today()
    load_seed(
        container.db,
        today=today,
        password_hash=generate_password_hash,
        default_password=config["DEMO_PASSWORD"],
    )

    for record in container.attendance_service.records_for_user("user_6", today - timedelta(days=6), today):
        print(record.to_dict())


if __name__ == "__main__":
    main()

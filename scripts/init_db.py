from __future__ import annotations

import importlib

from dotenv import load_dotenv

from staff_payroll.database.bootstrap import apply_schema
from staff_payroll.database.connection import DBConfig
from staff_payroll.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(settings.DB_CONFIG)

    count = apply_schema(config)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (statements={count})")


if __name__ == "__main__":
    main()

"""Create the database (if needed) and apply database/schema.sql.

    APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import argparse
import importlib
from pathlib import Path

from dotenv import load_dotenv

from attendance_reconciliation.config import get_settings_module
from attendance_reconciliation.core.logging import configure_logging, get_logger
from attendance_reconciliation.database.bootstrap import apply_schema, list_tables

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "database" / "schema.sql"

logger = get_logger("scripts.init_db")


def main(argv=None) -> None:
    load_dotenv(override=False)
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--schema", type=Path, default=DEFAULT_SCHEMA)
    args = parser.parse_args(argv)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=args.schema)
    tables = list_tables(db_config)
    logger.info(
        "applied %s to %s@%s:%s/%s (settings=%s, tables=%s)",
        args.schema.name,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        settings_module,
        ", ".join(sorted(tables)),
    )


if __name__ == "__main__":
    main()

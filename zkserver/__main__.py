# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""zknotes server: serve the API or export the credential store."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from zkserver.shared.config import load_config
from zkserver.shared.errors import AppError
from zkserver.shared.logging import logger, setup_logging


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="zkserver", description=__doc__)
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="TOML config file (default: $ZKSERVER_CONFIG or ./config.toml)",
    )
    parser.add_argument(
        "-e",
        "--export",
        metavar="FILE",
        type=Path,
        default=None,
        help="Export database to json",
    )
    return parser.parse_args(argv)


def export(config_file: Path | None, target: Path) -> None:
    from zkserver.infrastructure.db import init_db, open_database
    from zkserver.infrastructure.export import export_db

    config = load_config(config_file)
    database = open_database(config)
    try:
        init_db(database, config.token_lifetime)
        target.write_text(json.dumps(export_db(database), indent=2), encoding="utf-8")
    finally:
        database.dispose()
    logger.info(f"export: wrote {target}")


def serve(config_file: Path | None) -> None:
    from zkserver.app import create_app

    config = load_config(config_file)
    setup_logging(debug_mode=config.debug_logging)
    logger.info("server init!")
    logger.info(f"config: {config.model_dump(exclude={'secret_key'})}")

    app = create_app(config, start_scheduler=True)
    app.run(host=config.ip, port=config.port, threaded=True, use_reloader=False)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        if args.export is not None:
            export(args.config, args.export)
        else:
            serve(args.config)
    except (AppError, OSError) as exc:
        logger.error(f"error: {exc!r}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

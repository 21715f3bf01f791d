"""Backup the school database or the local store file.

Note: the remote backup needs `mysqldump` (MySQL client tools) on PATH.
"""

from __future__ import annotations

import importlib
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_records.school_records.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())

    out_dir = REPO_ROOT / "backups"
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if not settings.USE_REMOTE_DB:
        if not settings.LOCAL_STORE_PATH:
            raise SystemExit("LOCAL_STORE_PATH is empty: the local store lives in memory, nothing to back up.")
        source = REPO_ROOT / settings.LOCAL_STORE_PATH
        if not source.is_file():
            raise SystemExit(f"Local store {source} does not exist yet.")
        out_dir.mkdir(parents=True, exist_ok=True)
        out_file = out_dir / f"local_store_{ts}.json"
        shutil.copyfile(source, out_file)
        print(f"OK: Backup created: {out_file}")
        return

    db = DBConfig.from_url(settings.DB_URL, secret=settings.DB_SECRET)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db.database}_{ts}.sql"
    cmd = [
        "mysqldump",
        f"-h{db.host}",
        f"-P{db.port}",
        f"-u{db.user}",
        f"-p{db.password}",
        db.database,
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        print(f"OK: Backup created: {out_file}")
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools.")


if __name__ == "__main__":
    main()

"""Write a JSON backup of the tracker state.

Note: The file is the same payload the /api/export endpoint downloads and can be
loaded back with /api/import.
"""

from __future__ import annotations

import importlib
from pathlib import Path

from absence_tracker.config import get_settings_module
from absence_tracker.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=str(getattr(settings, "STORAGE_BACKEND", "memory")),
        db_config=dict(settings.DB_CONFIG),
    )
    transfer = container.transfer_service

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    out_file = out_dir / transfer.export_filename()
    out_file.write_text(transfer.export_json(), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()

from __future__ import annotations

import logging
import sys
from importlib.resources import files


def _configure_logging() -> None:
    """Send log records to a file in the data dir; the TUI owns the terminal."""
    from billbook.config import get_log_path

    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _init_config() -> None:
    """Copy bundled config templates to the user's config/data directories."""
    from billbook.config import get_config_dir, get_data_dir

    config_dir = get_config_dir()
    data_dir = get_data_dir()
    templates = files("billbook") / "templates"

    config_dir.mkdir(parents=True, exist_ok=True)
    data_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for rel in ["settings.yaml.example"]:
        dest = config_dir / rel
        if dest.exists():
            print(f"  already exists: {dest}")
            continue
        src = templates / rel
        with src.open("rb") as f:
            dest.write_bytes(f.read())
        print(f"  created: {dest}")
        copied += 1

    print()
    print(f"Config: {config_dir}")
    print(f"Data:   {data_dir}")
    print()
    if copied:
        print("Next steps:")
        print(f"  1. cp {config_dir / 'settings.yaml.example'} {config_dir / 'settings.yaml'}")
        print("  2. Edit settings.yaml (company name, first ids)")
        print("  3. Run: billbook")
    else:
        print("No new files created (all already existed).")


def _preflight() -> bool:
    """Make sure the data directory exists before launching the TUI.

    settings.yaml is optional; defaults apply when it is missing.
    """
    from billbook.config import get_data_dir

    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Error: cannot create data directory {data_dir}: {e}")
        print("Set BILLBOOK_DATA_DIR to a writable directory.")
        return False
    return True


def main() -> None:
    """Entry point for the billbook CLI/TUI."""
    if len(sys.argv) > 1 and sys.argv[1] == "init":
        _init_config()
        return

    if not _preflight():
        sys.exit(1)

    _configure_logging()

    from billbook.tui.app import BillbookApp

    app = BillbookApp()
    app.run()


if __name__ == "__main__":
    main()

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs
import yaml
from dotenv import load_dotenv

APP_NAME = "billbook"

CUSTOMERS = "customers"
ITEMS = "items"
INVOICES = "invoices_meta"
INVOICES_DIR = "invoices"

DEFAULT_COMPANY_NAME = "BILLING SYSTEM"
# settings.yaml key for each collection's first id
ID_START_KEYS = {CUSTOMERS: "customers", ITEMS: "items", INVOICES: "invoices"}
DEFAULT_ID_START = {"customers": 1001, "items": 5001, "invoices": 9001}


def _resolve_config_dir_for_dotenv() -> Path | None:
    """Resolve config dir for .env loading without depending on env vars from .env itself.

    Only checks sources available before .env is loaded (shell env var, dev
    layout, an existing platformdirs directory).
    """
    from_env = os.environ.get("BILLBOOK_CONFIG_DIR")
    if from_env:
        return Path(from_env)
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / "config"
    if candidate.is_dir():
        return candidate
    pd = Path(platformdirs.user_config_dir(APP_NAME))
    if pd.is_dir():
        return pd
    return None


# Load .env: cwd first (highest priority), then config dir (won't override)
load_dotenv()
_cfg_dir = _resolve_config_dir_for_dotenv()
if _cfg_dir is not None:
    load_dotenv(_cfg_dir / ".env")


def _resolve_dir(env_var: str, default_subdir: str, kind: str) -> Path:
    """Resolve a directory from env var, repo layout, or platform default.

    Priority: 1) env var, 2) dev repo layout, 3) platformdirs user directory.
    """
    from_env = os.environ.get(env_var)
    if from_env:
        return Path(from_env)
    # Development layout: src/billbook/config.py -> ../../.. = project root
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / default_subdir
    if candidate.is_dir():
        return candidate
    if kind == "config":
        return Path(platformdirs.user_config_dir(APP_NAME))
    return Path(platformdirs.user_data_dir(APP_NAME))


def get_config_dir() -> Path:
    """Resolve config directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir("BILLBOOK_CONFIG_DIR", "config", kind="config")


def get_data_dir() -> Path:
    """Resolve data directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir("BILLBOOK_DATA_DIR", "data", kind="data")


def get_log_path() -> Path:
    return get_data_dir() / f"{APP_NAME}.log"


# --- YAML settings ---


@dataclass(frozen=True)
class Settings:
    """Ledger-wide settings read from settings.yaml."""

    company_name: str = DEFAULT_COMPANY_NAME
    id_start: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_ID_START))

    @classmethod
    def from_dict(cls, d: dict | None) -> Settings:
        """Create Settings from a YAML-loaded dict, applying defaults for missing keys."""
        d = d or {}
        starts = dict(DEFAULT_ID_START)
        for key, value in (d.get("id_start") or {}).items():
            if key in starts:
                starts[key] = int(value)
        return cls(
            company_name=str(d.get("company_name", DEFAULT_COMPANY_NAME)),
            id_start=starts,
        )

    def start_for(self, collection: str) -> int:
        return self.id_start[ID_START_KEYS[collection]]


def load_yaml(path: Path) -> dict:
    """Load and parse a YAML file, returning the top-level dict."""
    return yaml.safe_load(path.read_text())


def load_settings() -> Settings:
    """Load settings from config/settings.yaml, or defaults when absent."""
    path = get_config_dir() / "settings.yaml"
    if not path.is_file():
        return Settings()
    return Settings.from_dict(load_yaml(path))

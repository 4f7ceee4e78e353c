from __future__ import annotations

import pytest
import yaml

import billbook.config as config_mod
from billbook.config import CUSTOMERS, INVOICES, ITEMS, Settings


class TestResolveDir:
    def test_from_env_var(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BILLBOOK_CONFIG_DIR", str(tmp_path))
        result = config_mod._resolve_dir("BILLBOOK_CONFIG_DIR", "config", kind="config")
        assert result == tmp_path

    def test_project_root_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("BILLBOOK_DATA_DIR", raising=False)
        fake_root = tmp_path / "src" / "billbook"
        fake_root.mkdir(parents=True)
        data_dir = tmp_path / "data"
        data_dir.mkdir()

        # Patch __file__ so project_root resolves to tmp_path
        monkeypatch.setattr(config_mod, "__file__", str(fake_root / "config.py"))
        assert config_mod.get_data_dir() == data_dir

    def test_platformdirs_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("BILLBOOK_CONFIG_DIR", raising=False)
        fake = tmp_path / "nowhere" / "src" / "billbook"
        fake.mkdir(parents=True)
        monkeypatch.setattr(config_mod, "__file__", str(fake / "config.py"))
        assert "billbook" in str(config_mod.get_config_dir())

    def test_log_path_in_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BILLBOOK_DATA_DIR", str(tmp_path))
        assert config_mod.get_log_path() == tmp_path / "billbook.log"


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.company_name == "BILLING SYSTEM"
        assert s.start_for(CUSTOMERS) == 1001
        assert s.start_for(ITEMS) == 5001
        assert s.start_for(INVOICES) == 9001

    def test_from_dict_partial(self):
        s = Settings.from_dict({"company_name": "ACME", "id_start": {"invoices": "100"}})
        assert s.company_name == "ACME"
        assert s.start_for(INVOICES) == 100
        assert s.start_for(CUSTOMERS) == 1001

    def test_from_dict_none(self):
        assert Settings.from_dict(None) == Settings()

    def test_unknown_keys_ignored(self):
        s = Settings.from_dict({"id_start": {"vendors": 1}})
        assert "vendors" not in s.id_start

    def test_bad_start_raises(self):
        with pytest.raises(ValueError):
            Settings.from_dict({"id_start": {"items": "abc"}})


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BILLBOOK_CONFIG_DIR", str(tmp_path))
        assert config_mod.load_settings() == Settings()

    def test_reads_yaml(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BILLBOOK_CONFIG_DIR", str(tmp_path))
        (tmp_path / "settings.yaml").write_text(
            yaml.dump({"company_name": "GLOBEX", "id_start": {"customers": 1}})
        )
        s = config_mod.load_settings()
        assert s.company_name == "GLOBEX"
        assert s.start_for(CUSTOMERS) == 1

    def test_empty_yaml_gives_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BILLBOOK_CONFIG_DIR", str(tmp_path))
        (tmp_path / "settings.yaml").write_text("")
        assert config_mod.load_settings() == Settings()

    def test_bundled_template_parses(self):
        from importlib.resources import files

        template = files("billbook") / "templates" / "settings.yaml.example"
        s = Settings.from_dict(yaml.safe_load(template.read_text()))
        assert s == Settings()

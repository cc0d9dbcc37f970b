from __future__ import annotations

from pathlib import Path
import json

from invoicer.core.settings import Settings, load_settings, save_settings


def test_missing_file_writes_defaults(tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "settings.json"
    settings = load_settings(path)
    assert settings == Settings()
    assert json.loads(path.read_text(encoding="utf-8"))["template_design"] == "modern_clean"


def test_round_trip_and_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    save_settings(Settings(theme_name="Deep Teal", multi_page=False), path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["business_name"] = "legacy key"
    path.write_text(json.dumps(raw), encoding="utf-8")

    loaded = load_settings(path)
    assert loaded.theme_name == "Deep Teal"
    assert loaded.multi_page is False
    assert not (tmp_path / "settings.json.tmp").exists()


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == Settings()
    # Left untouched for the user to fix
    assert path.read_text(encoding="utf-8") == "{not json"


def test_file_name() -> None:
    s = Settings(file_name_template="{number} {customer}")
    assert s.file_name("INV/7", customer="Acme: Inc") == "INV_7 Acme_ Inc.pdf"
    assert Settings(file_name_template="{missing}").file_name("7") == "Invoice-7.pdf"


def test_output_path(tmp_path: Path, monkeypatch) -> None:
    assert Settings(output_dir=str(tmp_path)).output_path("7") == tmp_path / "Invoice-7.pdf"
    monkeypatch.setenv("INVOICER_HOME", str(tmp_path))
    assert Settings().output_path("7") == tmp_path / "invoices" / "Invoice-7.pdf"


def test_default_location_follows_invoicer_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("INVOICER_HOME", str(tmp_path))
    save_settings(Settings(theme_name="Olive"))
    assert (tmp_path / "settings.json").exists()
    assert load_settings().theme_name == "Olive"

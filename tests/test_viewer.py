import json

import pytest

import viewer
from fetchers import CatalogError
from masterwork.balance import DEFAULT_BALANCE
from masterwork.catalog import DEFAULT_FILTER, CatalogFilter
from masterwork.models import RawItem

ITEMS = {
    "3031": RawItem(
        item_id="3031",
        name="Infinity Edge",
        description="<stats>65 Attack Damage</stats>",
    ),
    "3157": RawItem(
        item_id="3157",
        name="Zhonya's Hourglass",
        description="<stats>105 Ability Power<br>50 Armor</stats>",
    ),
}


def test_load_config_without_path_uses_defaults():
    assert viewer.load_config("") == {}


def test_load_config_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        viewer.load_config(str(tmp_path / "nope.json"))
    assert exc.value.code == 1


def test_load_config_rejects_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit):
        viewer.load_config(str(path))


def test_settings_from_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"balance": {"gold_per_item": 500}, "catalog": {"depths": [2, 3]}}),
        encoding="utf-8",
    )

    balance, criteria = viewer.settings_from_config(viewer.load_config(str(path)))

    assert balance.gold_per_item == 500
    assert criteria == CatalogFilter(depths=(2, 3))


def test_settings_default_when_sections_absent():
    assert viewer.settings_from_config({}) == (DEFAULT_BALANCE, DEFAULT_FILTER)


def test_invalid_settings_exit():
    with pytest.raises(SystemExit):
        viewer.settings_from_config({"balance": {"gold_per_item": "lots"}})


def test_run_once_prints_report_and_writes_snapshot(monkeypatch, tmp_path, capsys):
    snapshot = tmp_path / "items.json"
    calls = []

    def fake_fetch(version, criteria, locale="en_US"):
        calls.append((version, criteria, locale))
        return "14.13.1", ITEMS

    monkeypatch.setattr(viewer, "load_config", lambda: {})
    monkeypatch.setattr(viewer, "fetch_catalog", fake_fetch)
    monkeypatch.setattr(viewer, "VERSION", "latest")
    monkeypatch.setattr(viewer, "SEARCH_QUERY", "zhonya")
    monkeypatch.setattr(viewer, "SNAPSHOT_PATH", str(snapshot))

    assert viewer.run_once() == 0

    out = capsys.readouterr().out
    assert "Zhonya's Hourglass" in out
    assert "Infinity Edge" not in out
    assert calls == [("latest", DEFAULT_FILTER, viewer.LOCALE)]
    assert list(json.loads(snapshot.read_text(encoding="utf-8"))["items"]) == ["3157"]


def test_run_once_reports_catalog_failure(monkeypatch, capsys):
    def failing_fetch(version, criteria, locale="en_US"):
        raise CatalogError("unreachable")

    monkeypatch.setattr(viewer, "load_config", lambda: {})
    monkeypatch.setattr(viewer, "fetch_catalog", failing_fetch)

    assert viewer.run_once() == 1
    assert "Masterwork items" not in capsys.readouterr().out


def test_main_turns_unexpected_errors_into_exit_code(monkeypatch):
    def boom():
        raise RuntimeError("boom")

    monkeypatch.setattr(viewer, "run_once", boom)

    with pytest.raises(SystemExit) as exc:
        viewer.main()
    assert exc.value.code == 2

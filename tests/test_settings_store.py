from scaleruler.infra import settings_store
from scaleruler.infra.settings_store import (
    PropertiesSettingsStore,
    dump_properties,
    escape_property,
    parse_properties,
    unescape_property,
)


def test_escape_property_handles_separators_and_non_ascii():
    assert escape_property("scale.C:\\img\\a b.png", is_key=True) == "scale.C\\:\\\\img\\\\a\\ b.png"
    assert escape_property(" lead", is_key=False) == "\\ lead"
    assert escape_property("a b=c#d!") == "a b\\=c\\#d\\!"
    assert escape_property("é") == "\\u00E9"
    assert escape_property("line\nbreak") == "line\\nbreak"


def test_unescape_property_recombines_surrogate_pairs():
    assert unescape_property("\\uD83D\\uDCCF") == "\U0001F4CF"
    assert unescape_property("a\\:b\\=c") == "a:b=c"
    assert unescape_property("tab\\there") == "tab\there"


def test_parse_properties_supports_comments_separators_and_continuations():
    raw = "\n".join(
        [
            "#ScaleRuler settings",
            "! another comment",
            "lastPath=/home/user/plan.png",
            "colon.key: value one",
            "space.key   spaced value",
            "multi=first \\",
            "    second",
            "",
        ]
    )

    data = parse_properties(raw)

    assert data == {
        "lastPath": "/home/user/plan.png",
        "colon.key": "value one",
        "space.key": "spaced value",
        "multi": "first second",
    }


def test_dump_then_parse_preserves_awkward_keys_and_values():
    data = {
        "scale./home/user/my plan: v2.png": "1.2",
        "meas.C:\\plans\\é.png": "1.000000,2.000000,3.000000,4.000000",
        "lastPath": " leading space",
    }

    text = dump_properties(data)

    assert text.startswith("#ScaleRuler settings\n#")
    assert parse_properties(text) == data


def test_store_persist_and_reload(tmp_path):
    path = tmp_path / "nested" / "settings.properties"
    store = PropertiesSettingsStore(str(path))
    store.set("lastPath", "/tmp/a.png")
    store.set("scale./tmp/a.png", 1.5)

    assert store.persist() is True

    reloaded = PropertiesSettingsStore(str(path))
    reloaded.load()
    assert reloaded.get("lastPath") == "/tmp/a.png"
    assert reloaded.get("scale./tmp/a.png") == "1.5"
    assert reloaded.delete("lastPath") is True
    assert reloaded.delete("lastPath") is False
    assert reloaded.get("lastPath") is None


def test_store_load_missing_file_is_empty(tmp_path):
    store = PropertiesSettingsStore(str(tmp_path / "missing.properties"))

    assert store.load() == {}
    assert store.load_error is None


def test_store_load_skips_only_the_malformed_line(tmp_path):
    path = tmp_path / "bad.properties"
    path.write_text(
        "scale./imgs/a.png=1.5\nbroken=\\u12\nmeas./imgs/a.png=1,2,3,4\nodd=\\uZZZZ\n",
        encoding="latin-1",
    )
    store = PropertiesSettingsStore(str(path))

    store.load()

    assert store.load_error is None
    assert store.get("scale./imgs/a.png") == "1.5"
    assert store.get("meas./imgs/a.png") == "1,2,3,4"
    assert store.get("broken") is None
    assert store.skipped_lines == ["broken=\\u12", "odd=\\uZZZZ"]


def test_store_reads_back_lone_surrogates_it_wrote(tmp_path):
    path = tmp_path / "settings.properties"
    store = PropertiesSettingsStore(str(path))
    store.set("scale./imgs/other.png", "2.0")
    store.set("lastPath", "/imgs/bad\udcff.png")
    store.set("scale./imgs/\ud83d.png", "3.0")
    assert store.persist() is True

    reloaded = PropertiesSettingsStore(str(path))
    reloaded.load()

    assert reloaded.load_error is None
    assert reloaded.get("lastPath") == "/imgs/bad\udcff.png"
    assert reloaded.get("scale./imgs/\ud83d.png") == "3.0"
    assert reloaded.get("scale./imgs/other.png") == "2.0"


def test_unescape_property_keeps_unpaired_surrogates():
    assert unescape_property("\\uDCFF") == "\udcff"
    assert unescape_property("\\uD83Dx") == "\ud83dx"
    assert unescape_property("\\uDCCF\\uD83D") == "\udccf\ud83d"


def test_store_persist_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = PropertiesSettingsStore(str(blocker / "settings.properties"))
    store.set("lastPath", "/tmp/a.png")

    assert store.persist() is False
    assert store.save_error
    assert store.get("lastPath") == "/tmp/a.png"


def test_store_defaults_to_settings_file(tmp_path, monkeypatch):
    target = tmp_path / "default.properties"
    monkeypatch.setattr(settings_store, "SETTINGS_FILE", str(target))

    store = PropertiesSettingsStore()

    assert store.path == str(target)

import json

from marker_tables import DEFAULT_MARKERS, DEFAULT_PHRASES, MarkerTable, load_marker_overrides


def test_markers_cover_levels_two_to_four() -> None:
    markers = DEFAULT_MARKERS.markers()
    assert "## Contexte" in markers
    assert "### Objectives" in markers
    assert "#### Public cible" in markers
    assert "# Contexte" not in markers
    assert len(markers) == len(set(markers))


def test_merged_adds_titles_without_duplicates() -> None:
    table = MarkerTable(titles={"en": ("Context",)}).merged({"en": ["Context", "Timeline"], "de": ["Kontext"]})
    assert table.titles["en"] == ("Context", "Timeline")
    assert table.first_marker_in("text\n## Kontext\n") == "## Kontext"


def test_load_marker_overrides_from_json_and_file(tmp_path) -> None:
    assert load_marker_overrides('{"de": ["Kontext", " "]}') == {"de": ("Kontext",)}
    path = tmp_path / "markers.json"
    path.write_text(json.dumps({"es": "Contexto"}), encoding="utf-8")
    assert load_marker_overrides(str(path)) == {"es": ("Contexto",)}
    assert load_marker_overrides("{not json") == {}
    assert load_marker_overrides(str(tmp_path / "missing.json")) == {}
    assert load_marker_overrides(None) == {}


def test_phrase_labels_fall_back_to_first_locale() -> None:
    assert DEFAULT_PHRASES.label_for(DEFAULT_PHRASES.export_label, "en") == "Download as PDF"
    assert DEFAULT_PHRASES.label_for(DEFAULT_PHRASES.export_label, "de") == "Télécharger en PDF"

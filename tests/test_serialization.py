"""Tests for dict and YAML conversion of entries."""

import pytest
import yaml

from dictionary_editor.exceptions import ParseError
from dictionary_editor.models import Definition, Example
from dictionary_editor.serialization import (
    definition_from_dict,
    definition_to_dict,
    dump_entry_file,
    entry_to_dict,
    example_from_dict,
    load_entry_file,
    load_yaml,
    snapshot_from_dict,
    word_from_dict,
)
from dictionary_editor.store import DocumentStateStore

ENTRY_YAML = """
word:
  lemma: árbol
  root: árbol
  values:
    - meaning: Planta perenne de tronco leñoso
      categories: [m.]
      example:
        value: El árbol del patio
        author: Machado
        title: ""
    - meaning: Esquema ramificado
      categories: m.
      styles: [fig.]
      example:
        - Árbol genealógico
        - value: Árbol sintáctico
          source: Gramática
letter: a
status: included
assignedTo: 7
createdBy: "5"
wordId: 12
"""


class TestExamples:

    def test_string_example(self):
        assert example_from_dict("Hola") == Example(value="Hola")

    def test_blank_metadata_dropped(self):
        example = example_from_dict({"value": "x", "author": "  ", "page": 12})
        assert example == Example(value="x", page="12")

    def test_invalid_example(self):
        with pytest.raises(ParseError):
            example_from_dict(42)


class TestDefinitions:

    def test_number_comes_from_position(self):
        definition = definition_from_dict({"number": 9, "meaning": "m"}, 3)
        assert definition.number == 3

    def test_missing_example_becomes_blank(self):
        definition = definition_from_dict({"meaning": "m"}, 1)
        assert definition.examples == (Example(),)

    def test_single_example_written_bare(self):
        data = definition_to_dict(Definition(number=1, example=Example(value="x")))
        assert data["example"] == {"value": "x"}

    def test_several_examples_written_as_list(self):
        definition = Definition(number=1, example=(Example(value="a"), Example(value="b")))
        assert definition_to_dict(definition)["example"] == [{"value": "a"}, {"value": "b"}]

    def test_empty_styles_written_as_null(self):
        assert definition_to_dict(Definition(number=1))["styles"] is None


class TestEntries:

    def test_parse_entry(self):
        entry = snapshot_from_dict(yaml.safe_load(ENTRY_YAML))
        assert entry.word.lemma == "árbol"
        assert entry.created_by == 5
        assert entry.word_id == 12
        first, second = entry.word.values
        assert first.examples == (Example(value="El árbol del patio", author="Machado"),)
        assert second.categories == ("m.",)
        assert second.styles == ("fig.",)
        assert [e.value for e in second.examples] == ["Árbol genealógico", "Árbol sintáctico"]

    def test_defaults(self):
        entry = snapshot_from_dict({"lemma": "Casa"})
        assert entry.letter == "c"
        assert entry.status == "draft"
        assert entry.assigned_to is None

    def test_missing_lemma(self):
        with pytest.raises(ParseError):
            word_from_dict({"root": "x"})

    def test_bad_integer(self):
        with pytest.raises(ParseError):
            snapshot_from_dict({"lemma": "x", "assignedTo": "nadie"})

    def test_payload_keys(self, store):
        payload = entry_to_dict(store.snapshot)
        assert set(payload) == {"word", "letter", "status", "assignedTo"}
        assert set(payload["word"]) == {"lemma", "root", "values"}

    def test_file_round_trip_keeps_metadata(self, tmp_path):
        source = tmp_path / "arbol.yaml"
        source.write_text(ENTRY_YAML, encoding="utf-8")
        entry = load_entry_file(source)
        target = tmp_path / "out.yaml"
        dump_entry_file(entry, target)
        assert load_entry_file(target) == entry
        assert "árbol" in target.read_text(encoding="utf-8")

    def test_store_accepts_loaded_entry(self, tmp_path):
        source = tmp_path / "arbol.yaml"
        source.write_text(ENTRY_YAML, encoding="utf-8")
        store = DocumentStateStore.from_word_snapshot(load_entry_file(source))
        assert store.status == "included"
        assert store.assigned_to == 7


class TestLoadYaml:

    def test_invalid_yaml_reports_line(self):
        with pytest.raises(ParseError) as exc_info:
            load_yaml("lemma: casa\nvalues: [\n")
        assert exc_info.value.line is not None

    def test_empty(self):
        with pytest.raises(ParseError, match="Empty"):
            load_yaml("")

    def test_non_mapping(self):
        with pytest.raises(ParseError, match="mapping"):
            load_yaml("- a\n- b\n")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_entry_file(tmp_path / "nope.yaml")

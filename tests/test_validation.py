"""Tests for the word validation rules."""

from dictionary_editor.models import PLACEHOLDER_MEANING, Definition, Example, Word
from dictionary_editor.validator import has_errors, validate_word


def rule_ids(results):
    return {r.rule_id for r in results}


class TestValidateClean:

    def test_clean_word(self, word):
        results = validate_word(word, letter="c")
        assert results == []
        assert not has_errors(results)


class TestWordRules:

    def test_blank_lemma(self):
        results = validate_word(Word(lemma="  ", values=(Definition(number=1),)))
        assert "VAL-WRD-001" in rule_ids(results)
        assert has_errors(results)

    def test_bad_letter(self, word):
        results = validate_word(word, letter="ch")
        assert "VAL-WRD-002" in rule_ids(results)

    def test_letter_not_checked_when_omitted(self, word):
        assert validate_word(word) == []

    def test_no_definitions_is_warning(self):
        results = validate_word(Word(lemma="casa"))
        assert rule_ids(results) == {"VAL-WRD-003"}
        assert not has_errors(results)


class TestDefinitionRules:

    def test_number_out_of_sync(self):
        word = Word(
            lemma="casa",
            values=(Definition(number=2, meaning="m", categories=("f.",),
                               example=Example(value="x")),),
        )
        results = validate_word(word)
        assert rule_ids(results) == {"VAL-DEF-001"}
        assert results[0].entity_id == "casa#1"

    def test_placeholder_meaning(self):
        word = Word(
            lemma="casa",
            values=(Definition(number=1, meaning=PLACEHOLDER_MEANING, categories=("f.",),
                               example=Example(value="x")),),
        )
        assert rule_ids(validate_word(word)) == {"VAL-DEF-002"}

    def test_blank_meaning_and_categories(self):
        word = Word(lemma="casa", values=(Definition(number=1, example=Example(value="x")),))
        assert rule_ids(validate_word(word)) == {"VAL-DEF-002", "VAL-DEF-003"}


class TestExampleRules:

    def test_blank_example(self):
        word = Word(
            lemma="casa",
            values=(Definition(
                number=1, meaning="m", categories=("f.",),
                example=(Example(value="ok"), Example(value="  ")),
            ),),
        )
        results = validate_word(word)
        assert rule_ids(results) == {"VAL-EX-001"}
        assert results[0].entity_id == "casa#1.2"

"""Unit tests for the label catalogs."""

import pytest

from kennel.i18n import CATALOGS, Translator


class TestTranslator:
    """Test label lookups per locale."""

    def test_litter_name_in_english(self):
        assert Translator("en").litter_name("Bella", "Max") == "Litter Bella x Max"

    def test_litter_name_in_portuguese(self):
        assert Translator("pt_BR").litter_name("Bella", "Max") == "Ninhada Bella x Max"

    @pytest.mark.parametrize("locale,expected", [("en", "Unknown"), ("pt_BR", "Desconhecido")])
    def test_unknown_ancestor_label(self, locale, expected):
        assert Translator(locale).gettext("unknown_ancestor") == expected

    @pytest.mark.parametrize("generation,sex,expected", [
        (1, "male", "Father"),
        (1, "female", "Mother"),
        (2, "male", "Grandfather"),
        (3, "female", "Great-grandmother"),
        (5, "male", "Great-great-great-grandfather"),
    ])
    def test_ancestor_roles(self, generation, sex, expected):
        assert Translator("en").ancestor_role(generation, sex) == expected

    def test_role_beyond_catalog_is_generic_ancestor(self):
        assert Translator("pt_BR").ancestor_role(6, "male") == "Ancestral"

    def test_generation_labels(self):
        labels = Translator("pt_BR").generation_labels()

        assert labels == {1: "Pais", 2: "Avós", 3: "Bisavós", 4: "Trisavós", 5: "Tetravós"}

    def test_unknown_key_falls_back_to_key(self):
        assert Translator("en").gettext("no.such.key") == "no.such.key"

    def test_unsupported_locale_is_rejected(self):
        with pytest.raises(ValueError):
            Translator("de")

    def test_catalogs_define_the_same_keys(self):
        """Test that every locale translates every label."""
        assert set(CATALOGS["en"]) == set(CATALOGS["pt_BR"])

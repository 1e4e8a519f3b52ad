"""Tests for guess normalization."""

from guesser.normalizer import contains_key, is_blank, normalize


class TestNormalize:
    def test_trims_and_lowercases(self):
        assert normalize("  Golden Retriever ") == "golden retriever"

    def test_case_variants_share_a_key(self):
        assert normalize("DOG") == normalize("dog") == normalize(" Dog")

    def test_inner_whitespace_is_kept(self):
        assert normalize("New  York") == "new  york"

    def test_non_ascii(self):
        assert normalize("Ö-land ") == "ö-land"


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank("")
        assert is_blank("   ")
        assert is_blank("\t\n")

    def test_non_blank(self):
        assert not is_blank(" a ")


class TestContainsKey:
    def test_match_ignores_case_and_padding(self):
        assert contains_key(["Dog", "Cat"], "  dOG ")

    def test_no_match(self):
        assert not contains_key(["Dog", "Cat"], "Cow")

    def test_empty_items(self):
        assert not contains_key([], "Dog")

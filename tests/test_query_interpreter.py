"""Test cases for natural language query interpretation."""

import pytest

from string_analyzer.domain import StructuredFilter
from string_analyzer.exceptions import InvalidInputError
from string_analyzer.services.query_interpreter import interpret_query


class TestPalindromeRule:

    @pytest.mark.parametrize("query", [
        "a palindrome",
        "palindromic strings",
        "show me palindromes",
        "PALINDROME",
    ])
    def test_palindrome_words(self, query):
        assert interpret_query(query) == StructuredFilter(is_palindrome=True)

    def test_bare_palindrome_example_is_unparsable(self):
        assert interpret_query("racecar") is None

    def test_unrelated_substring_does_not_match(self):
        assert interpret_query("palindromesque") is None


class TestWordCountRule:

    @pytest.mark.parametrize("query, expected", [
        ("single word strings", 1),
        ("one word", 1),
        ("two words", 2),
        ("three-word strings", 3),
        ("four strings", 4),
        ("five", 5),
    ])
    def test_number_words(self, query, expected):
        assert interpret_query(query).word_count == expected

    def test_single_string_fallback(self):
        assert interpret_query("single string") == StructuredFilter(word_count=1)

    def test_fallback_overrides_primary_match(self):
        # "two" is matched first, but "single" + "string" forces one word
        assert interpret_query("two words in a single string").word_count == 1

    def test_fallback_uses_substrings(self):
        assert interpret_query("singles on a keystring").word_count == 1

    def test_first_number_word_wins(self):
        assert interpret_query("two or three words").word_count == 2

    def test_number_word_inside_other_word_is_ignored(self):
        assert interpret_query("someone") is None

    def test_single_palindrome_string(self):
        assert interpret_query("single palindrome string") == StructuredFilter(
            is_palindrome=True, word_count=1
        )

    def test_all_single_word_palindromic_strings(self):
        assert interpret_query("all single word palindromic strings") == StructuredFilter(
            is_palindrome=True, word_count=1
        )


class TestLengthRules:

    @pytest.mark.parametrize("query, expected", [
        ("longer than 5", StructuredFilter(min_length=6)),
        ("more than 8 characters", StructuredFilter(min_length=9)),
        ("shorter than 5", StructuredFilter(max_length=4)),
        ("less than 3", StructuredFilter(max_length=2)),
    ])
    def test_comparatives(self, query, expected):
        assert interpret_query(query) == expected

    def test_only_first_comparative_applies(self):
        assert interpret_query("longer than 3 and shorter than 10") == StructuredFilter(min_length=4)
        assert interpret_query("shorter than 10 and longer than 3") == StructuredFilter(max_length=9)

    @pytest.mark.parametrize("query", ["10 characters", "10 character", "10chars", "strings with 10 chars"])
    def test_character_count_sets_lower_bound_only(self, query):
        result = interpret_query(query)
        assert result.min_length == 10
        assert result.max_length is None

    def test_character_count_ignored_when_comparative_present(self):
        assert interpret_query("strings longer than 10 characters") == StructuredFilter(min_length=11)
        assert interpret_query("strings shorter than 10 characters") == StructuredFilter(max_length=9)

    def test_shorter_than_zero_gives_negative_bound(self):
        assert interpret_query("shorter than 0") == StructuredFilter(max_length=-1)


class TestContainsRule:

    @pytest.mark.parametrize("query", [
        "strings that contain the letter z",
        "contains z",
        "words with the letter z",
        "having z",
        "include the letter z",
        "includes z",
    ])
    def test_letter_captured(self, query):
        assert interpret_query(query).contains_character == "z"

    def test_letter_is_lowercased(self):
        assert interpret_query("contains the letter Q").contains_character == "q"

    def test_containment_combined_with_other_rules(self):
        assert interpret_query("palindromes with the letter r") == StructuredFilter(
            is_palindrome=True, contains_character="r"
        )


class TestVowelRule:

    def test_first_vowel(self):
        assert interpret_query("strings containing the first vowel") == StructuredFilter(contains_character="a")

    def test_last_vowel(self):
        assert interpret_query("the last vowel") == StructuredFilter(contains_character="u")

    def test_any_vowel(self):
        assert interpret_query("has a vowel") == StructuredFilter(contains_character="a")

    def test_vowel_overrides_containment(self):
        assert interpret_query("with the letter z and the last vowel").contains_character == "u"

    def test_palindromic_strings_that_contain_the_first_vowel(self):
        assert interpret_query("palindromic strings that contain the first vowel") == StructuredFilter(
            is_palindrome=True, contains_character="a"
        )


class TestUniversalAndUnparsable:

    @pytest.mark.parametrize("query", ["all strings", "All", "  all the things  ", "every string"])
    def test_universal_queries_return_empty_filter(self, query):
        result = interpret_query(query)

        assert result is not None
        assert result.is_empty()

    def test_universal_word_does_not_hide_other_rules(self):
        assert interpret_query("give me every one") == StructuredFilter(word_count=1)

    @pytest.mark.parametrize("query", ["racecar", "", "   ", "hello there", "allowed strings", "everyday strings"])
    def test_unparsable(self, query):
        assert interpret_query(query) is None

    def test_universal_with_other_rule_keeps_rule(self):
        assert interpret_query("all palindromes") == StructuredFilter(is_palindrome=True)

    def test_empty_filter_is_distinct_from_unparsable(self):
        assert interpret_query("all strings") == StructuredFilter()
        assert interpret_query("nothing here") is None

    def test_non_string_query(self):
        with pytest.raises(InvalidInputError):
            interpret_query(42)

    def test_deterministic(self):
        query = "single word palindromic strings longer than 3 with the letter a"
        assert interpret_query(query) == interpret_query(query)


class TestOversizedNumbers:
    """Numbers too long for int() skip their rule instead of failing."""

    HUGE = "9" * 5000

    def test_comparative_with_huge_number(self):
        assert interpret_query("longer than " + self.HUGE) is None

    def test_character_count_with_huge_number(self):
        assert interpret_query(self.HUGE + " characters") is None

    def test_other_rules_still_apply(self):
        assert interpret_query("palindromes shorter than " + self.HUGE) == StructuredFilter(is_palindrome=True)

    def test_huge_comparative_leaves_character_count_rule_free(self):
        assert interpret_query("longer than " + self.HUGE + " with 5 characters") == StructuredFilter(min_length=5)

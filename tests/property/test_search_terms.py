"""Property-based tests for free-text search helpers"""

import re

from hypothesis import given, strategies as st

from backend.app.repositories.filters import escape_like, contains_pattern, search_terms


def like_to_regex(pattern: str) -> str:
    """Translate a LIKE pattern using a backslash escape into a regex"""
    out, i = [], 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        out.append(".*" if char == "%" else "." if char == "_" else re.escape(char))
        i += 1
    return "".join(out)


class TestLikeEscaping:
    
    @given(needle=st.text(alphabet="ab%_\\", max_size=6), haystack=st.text(alphabet="ab%_\\", max_size=12))
    def test_contains_pattern_is_literal_substring(self, needle, haystack):
        """The escaped pattern matches exactly the strings containing the text"""
        regex = like_to_regex(contains_pattern(needle))
        
        assert bool(re.fullmatch(regex, haystack, re.DOTALL)) == (needle in haystack)
    
    def test_specials_escaped(self):
        assert escape_like("50%_off\\now") == "50\\%\\_off\\\\now"


class TestSearchTerms:
    
    @given(words=st.lists(st.text(alphabet="abcXYZé%", min_size=1, max_size=5), max_size=6))
    def test_words_split_and_deduplicated(self, words):
        terms = search_terms("  ".join(words))
        
        assert terms == list(dict.fromkeys(words))
    
    def test_blank_query_has_no_terms(self):
        assert search_terms("   \t ") == []

"""Property-based tests for the BBCode conversion pipeline.

Test Coverage:
- Property: text without tags is returned unchanged
- Property: arbitrary input never crashes the pipeline
- Property: emphasis wraps the space-trimmed content
- Property: unicode content survives conversion
- Property: non-callable cleaners never change the output
"""

import pytest
from hypothesis import given, strategies as st

from bbcode2md import BBCodeConverter, to_markdown

# Text that cannot open a BBCode tag
untagged_text = st.text(alphabet=st.characters(blacklist_characters="[", blacklist_categories=["Cs"]), max_size=200)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestConversionProperties:
    """Property-based tests for to_markdown."""

    @given(untagged_text)
    def test_untagged_text_is_identity(self, text):
        """Property: plain text comes back unchanged."""
        assert to_markdown(text) == text

    @given(st.text(max_size=200))
    def test_arbitrary_text_does_not_crash(self, text):
        """Property: any string converts to a string (or stays empty)."""
        result = to_markdown(text)
        assert isinstance(result, str)

    @given(
        st.sampled_from([("b", "**"), ("i", "*"), ("u", "_"), ("s", "~~")]),
        untagged_text,
    )
    def test_emphasis_wraps_trimmed_content(self, tag_and_marker, content):
        """Property: [x]content[/x] becomes marker + content.strip(' ') + marker."""
        tag, marker = tag_and_marker
        assert to_markdown(f"[{tag}]{content}[/{tag}]") == marker + content.strip(" ") + marker

    @given(st.text(alphabet=st.characters(min_codepoint=0x80, blacklist_categories=["Cs"]), min_size=1, max_size=50))
    def test_unicode_inside_tags_passes_through(self, content):
        """Property: multi-byte content inside a link label is unchanged."""
        assert to_markdown(f"[url=http://x.com]{content}[/url]") == f"[{content}](http://x.com)"

    @given(untagged_text, st.one_of(st.none(), st.integers(), st.text(max_size=10)))
    def test_non_callable_cleaner_is_ignored(self, text, value):
        """Property: registering a non-callable value never changes the result."""
        converter = BBCodeConverter()
        converter.add_cleaner("extra", value)

        assert converter.to_markdown(text) == text

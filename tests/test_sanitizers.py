"""Tests for text, structure and file-name sanitizers."""

from collections import namedtuple

import pytest

from request_guard.utils.sanitizers import (
    MAX_FILE_NAME_LENGTH,
    sanitize_file_name,
    sanitize_structure,
    sanitize_text,
)


Segment = namedtuple("Segment", ["city", "nights"])


class TestSanitizeText:
    def test_removes_script_block_with_content(self) -> None:
        assert sanitize_text("<script>alert(1)</script>hello") == "hello"

    def test_script_removal_is_case_insensitive_with_attributes(self) -> None:
        text = '<SCRIPT type="text/javascript">steal(document.cookie)</ScRiPt>safe'
        assert sanitize_text(text) == "safe"

    def test_script_removal_stops_at_first_closing_tag(self) -> None:
        text = "<script>a()</script>middle<script>b()</script>end"
        assert sanitize_text(text) == "middleend"

    def test_script_with_nested_markup_in_body(self) -> None:
        text = "<script>if (a < b) { x('<p>') }</script>ok"
        assert sanitize_text(text) == "ok"

    def test_strips_tags_and_escapes_quotes(self) -> None:
        assert sanitize_text("<b>a</b> & 'x' \"y\"") == "a & &#39;x&#39; &quot;y&quot;"

    def test_keeps_inner_text_of_other_tags(self) -> None:
        assert sanitize_text('<a href="https://x.test">link</a>') == "link"

    def test_escapes_stray_angle_brackets(self) -> None:
        # an unpaired bracket never forms a tag, so it survives stripping
        assert sanitize_text("a < b") == "a &lt; b"
        assert sanitize_text("b > a") == "b &gt; a"

    def test_bracket_pair_is_treated_as_tag(self) -> None:
        assert sanitize_text("1 < 3 and 5 > 4") == "1  4"

    def test_ampersand_is_not_escaped(self) -> None:
        assert sanitize_text("Tom & Jerry") == "Tom & Jerry"

    def test_trims_whitespace(self) -> None:
        assert sanitize_text("   <i>hi</i>\n\t") == "hi"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input_returns_empty_string(self, value) -> None:
        assert sanitize_text(value) == ""

    def test_plain_text_unchanged(self) -> None:
        assert sanitize_text("Stayed in Seoul for 30 days") == "Stayed in Seoul for 30 days"


class TestSanitizeStructure:
    def test_mapping_with_nested_list(self) -> None:
        result = sanitize_structure({"a": "<i>x</i>", "b": [1, "<u>y</u>"]})
        assert result == {"a": "x", "b": [1, "y"]}

    def test_keys_are_sanitized(self) -> None:
        result = sanitize_structure({"<b>name</b>": "v", "it's": 1})
        assert result == {"name": "v", "it&#39;s": 1}

    def test_scalars_pass_through(self) -> None:
        payload = {"n": 3, "f": 1.5, "ok": True, "none": None, "raw": b"<b>"}
        assert sanitize_structure(payload) == payload

    def test_sequence_order_and_type_preserved(self) -> None:
        assert sanitize_structure(("<b>1</b>", 2, "3")) == ("1", 2, "3")
        assert sanitize_structure(["c", "<i>b</i>", "a"]) == ["c", "b", "a"]

    def test_does_not_mutate_input(self) -> None:
        payload = {"a": ["<b>x</b>"]}
        sanitize_structure(payload)
        assert payload == {"a": ["<b>x</b>"]}

    def test_non_string_keys_kept(self) -> None:
        assert sanitize_structure({1: "<b>one</b>"}) == {1: "one"}

    def test_colliding_keys_keep_last_value(self) -> None:
        assert sanitize_structure({"<b>k</b>": 1, "k": 2}) == {"k": 2}

    def test_shared_reference_is_not_a_cycle(self) -> None:
        shared = ["<b>s</b>"]
        assert sanitize_structure({"a": shared, "b": shared}) == {"a": ["s"], "b": ["s"]}

    def test_cyclic_list_rejected(self) -> None:
        loop: list = ["x"]
        loop.append(loop)
        with pytest.raises(ValueError):
            sanitize_structure(loop)

    def test_cyclic_dict_rejected(self) -> None:
        loop: dict = {"a": "x"}
        loop["self"] = {"inner": loop}
        with pytest.raises(ValueError):
            sanitize_structure(loop)

    def test_namedtuple_rebuilt_with_its_fields(self) -> None:
        result = sanitize_structure({"legs": [Segment("<b>Seoul</b>", 3)]})

        leg = result["legs"][0]
        assert isinstance(leg, Segment)
        assert leg == Segment("Seoul", 3)

    def test_plain_string(self) -> None:
        assert sanitize_structure("<script>x</script>hi") == "hi"


class TestSanitizeFileName:
    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_file_name("my photo (1).png") == "my_photo__1_.png"

    def test_blocks_path_traversal(self) -> None:
        result = sanitize_file_name("../../etc/passwd")
        assert ".." not in result
        assert "/" not in result
        assert result == "._._etc_passwd"

    def test_collapses_dot_runs(self) -> None:
        assert sanitize_file_name("a....b...c") == "a.b.c"

    def test_keeps_safe_name(self) -> None:
        assert sanitize_file_name("screenshot-2024.01.png") == "screenshot-2024.01.png"

    def test_truncates_to_max_length(self) -> None:
        result = sanitize_file_name("a" * 300 + ".png")
        assert len(result) == MAX_FILE_NAME_LENGTH == 255

    def test_non_ascii_replaced(self) -> None:
        assert sanitize_file_name("여행.jpg") == "__.jpg"

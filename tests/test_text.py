import unittest

from ardabot.text import (
    BoundaryNotFound,
    LONG_TEXT_THRESHOLD,
    capitalize_first_letters,
    find_boundary,
    format_army_units,
    format_unpaid_armies,
    is_long_text,
    segment,
)


class LongTextTests(unittest.TestCase):
    def test_threshold_is_inclusive(self) -> None:
        self.assertFalse(is_long_text("a" * 1899))
        self.assertTrue(is_long_text("a" * 1900))
        self.assertFalse(is_long_text(""))


class FindBoundaryTests(unittest.TestCase):
    def test_word_mode_stops_after_first_delimiter(self) -> None:
        self.assertEqual(find_boundary("abc def", 0, False), 4)
        self.assertEqual(find_boundary("abc,def", 0, False), 4)
        self.assertEqual(find_boundary("abc\ndef", 0, False), 4)

    def test_word_mode_scans_from_position(self) -> None:
        text = "a b c"
        self.assertEqual(find_boundary(text, 2, False), 4)

    def test_delimiter_at_position_is_included(self) -> None:
        self.assertEqual(find_boundary("ab cd", 2, False), 3)

    def test_word_mode_without_delimiter_returns_none(self) -> None:
        self.assertIsNone(find_boundary("abc def", 4, False))

    def test_position_at_end_returns_none(self) -> None:
        self.assertIsNone(find_boundary("abc ", 4, False))
        self.assertIsNone(find_boundary("```", 3, True))

    def test_fence_mode_stops_after_third_backtick(self) -> None:
        text = "x ``` y"
        self.assertEqual(find_boundary(text, 0, True), 5)
        self.assertEqual(find_boundary("a`b`c`d", 0, True), 6)

    def test_fence_mode_ignores_word_delimiters(self) -> None:
        self.assertEqual(find_boundary("a, b\n``` c", 0, True), 8)

    def test_fence_mode_with_fewer_than_three_backticks_returns_none(self) -> None:
        self.assertIsNone(find_boundary("``", 0, True))
        self.assertIsNone(find_boundary("```x", 1, True))


class SegmentTests(unittest.TestCase):
    def test_short_text_is_single_chunk(self) -> None:
        self.assertEqual(segment("short text", False), ["short text"])
        self.assertEqual(segment("short text"), ["short text"])

    def test_empty_text_is_single_empty_chunk(self) -> None:
        self.assertEqual(segment(""), [""])

    def test_text_just_below_threshold_is_untouched(self) -> None:
        text = "a" * 1899
        self.assertEqual(segment(text), [text])
        self.assertEqual(segment(text, True), [text])

    def test_split_after_space_at_threshold(self) -> None:
        text = " " * 1901 + "END"
        self.assertEqual(segment(text), [" " * 1901, "END"])

    def test_split_through_comma(self) -> None:
        text = "a" * 1905 + "," + "b" * 1094
        self.assertEqual(len(text), 3000)
        chunks = segment(text)
        self.assertEqual(chunks, [text[:1906], text[1906:]])
        self.assertTrue(chunks[0].endswith(","))

    def test_delimiters_before_threshold_are_ignored(self) -> None:
        text = "a " * 100 + "b" * 1800 + "\n" + "c" * 50
        chunks = segment(text)
        self.assertEqual(len(chunks[0]), 2001)
        self.assertTrue(chunks[0].endswith("\n"))

    def test_missing_boundary_raises(self) -> None:
        text = ("ab " * 700)[:1900] + "x" * 600
        self.assertEqual(len(text), 2500)
        with self.assertRaises(BoundaryNotFound) as ctx:
            segment(text)
        self.assertEqual(ctx.exception.position, 1900)
        self.assertFalse(ctx.exception.format_aware)

    def test_text_exactly_at_threshold_without_boundary_raises(self) -> None:
        with self.assertRaises(BoundaryNotFound):
            segment("a" * 1900)

    def test_boundary_not_found_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            segment("z" * 4000)

    def test_missing_boundary_in_later_chunk_reports_absolute_offset(self) -> None:
        text = "a" * 1900 + " " + "b" * 2000
        with self.assertRaises(BoundaryNotFound) as ctx:
            segment(text)
        self.assertEqual(ctx.exception.position, 1901 + 1900)

    def test_fence_mode_splits_after_third_backtick(self) -> None:
        chars = ["a"] * 2200
        for index in (1950, 1955, 1960):
            chars[index] = "`"
        text = "".join(chars)
        chunks = segment(text, True)
        self.assertEqual(len(chunks), 2)
        self.assertEqual(len(chunks[0]), 1961)
        self.assertEqual("".join(chunks), text)

    def test_fence_mode_without_fence_raises(self) -> None:
        text = "word " * 500
        with self.assertRaises(BoundaryNotFound) as ctx:
            segment(text, True)
        self.assertTrue(ctx.exception.format_aware)

    def test_fence_mode_is_kept_for_every_chunk(self) -> None:
        block = "x" * 1900 + "```py\nprint(1)\n```" + " filler, text\n"
        text = block * 3
        chunks = segment(text, True)
        self.assertEqual("".join(chunks), text)
        for chunk in chunks[:-1]:
            self.assertTrue(chunk.endswith("`"))
            self.assertEqual(chunk[LONG_TEXT_THRESHOLD:].count("`"), 3)

    def test_word_mode_round_trip_and_chunk_shape(self) -> None:
        text = "Lorem ipsum dolor sit amet, consectetur\nadipiscing elit " * 200
        chunks = segment(text)
        self.assertGreater(len(chunks), 2)
        self.assertEqual("".join(chunks), text)
        for chunk in chunks[:-1]:
            self.assertIn(chunk[-1], (" ", ",", "\n"))
            self.assertGreater(len(chunk), LONG_TEXT_THRESHOLD)
            self.assertLessEqual(len(chunk), LONG_TEXT_THRESHOLD + 12)
        self.assertLess(len(chunks[-1]), LONG_TEXT_THRESHOLD)

    def test_segment_is_repeatable(self) -> None:
        text = "alpha, beta gamma\n" * 400
        self.assertEqual(segment(text), segment(text))


class CapitalizeFirstLettersTests(unittest.TestCase):
    def test_capitalizes_each_word(self) -> None:
        self.assertEqual(capitalize_first_letters("iron sword"), "Iron Sword")

    def test_commas_and_periods_collapse_to_spaces(self) -> None:
        self.assertEqual(capitalize_first_letters("bread,fish. meat"), "Bread Fish Meat")

    def test_existing_casing_is_kept(self) -> None:
        self.assertEqual(capitalize_first_letters("mcDonald of rohan"), "McDonald Of Rohan")

    def test_empty_string(self) -> None:
        self.assertEqual(capitalize_first_letters(""), "")


class ArmyFormattingTests(unittest.TestCase):
    def test_unit_list_accepts_mapping_and_plain_unit_types(self) -> None:
        army = {
            "units": [
                {"amountAlive": 3, "count": 5, "unitType": {"unitName": "Gondor Soldier"}},
                {"amountAlive": 1, "count": 1, "unitType": "Ranger of Ithilien"},
            ]
        }
        self.assertEqual(
            format_army_units(army),
            "3/5 Gondor Soldier\n1/1 Ranger of Ithilien\n",
        )

    def test_unit_list_without_units_is_empty(self) -> None:
        self.assertEqual(format_army_units({}), "")

    def test_unpaid_summary_lists_each_army(self) -> None:
        armies = [
            {"name": "Knights of Dol Amroth", "faction": {"name": "Gondor"}, "createdAt": "2022-05-01T10:00:00"},
            {"name": "Uruk Host", "faction": {"name": "Isengard"}, "createdAt": "2022-06-11T08:30:00"},
        ]
        self.assertEqual(
            format_unpaid_armies(armies),
            "Name: Knights of Dol Amroth | Faction: Gondor | Creation date: 2022-05-01\n"
            "Name: Uruk Host | Faction: Isengard | Creation date: 2022-06-11\n",
        )

    def test_unpaid_summary_without_armies(self) -> None:
        self.assertEqual(format_unpaid_armies([]), "No armies unpaid")

    def test_unpaid_summary_does_not_leak_between_calls(self) -> None:
        armies = [{"name": "A", "faction": {"name": "F"}, "createdAt": "2022-01-01"}]
        first = format_unpaid_armies(armies)
        self.assertEqual(format_unpaid_armies(armies), first)


if __name__ == "__main__":
    unittest.main()

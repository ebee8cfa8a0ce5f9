import unittest

from chat_checker.domain import (
    ErrorKind,
    FetchResult,
    Group,
    InvalidPhoneNumberError,
    filter_groups,
    is_valid_phone_number,
    matches_title,
    validate_phone_number,
)
from chat_checker.domain.models import parse_timestamp


class TestMatchesTitle(unittest.TestCase):

    def test_case_insensitive_substring(self):
        self.assertTrue(matches_title("Family Chat", "family"))
        self.assertTrue(matches_title("Family Chat", "LY CH"))
        self.assertFalse(matches_title("Family Chat", "work"))

    def test_absent_name_never_matches(self):
        self.assertFalse(matches_title(None, "x"))

    def test_casefold(self):
        self.assertTrue(matches_title("Straße Gruppe", "STRASSE"))

    def test_filter_without_term_keeps_all(self):
        groups = [Group(uuid="1", name="A"), Group(uuid="2", name=None)]
        self.assertEqual(filter_groups(groups, None), groups)
        self.assertEqual(filter_groups(groups, ""), groups)
        self.assertEqual(filter_groups(groups, "a"), groups[:1])


class TestPhoneValidation(unittest.TestCase):

    def test_valid_numbers(self):
        for number in ("+12", "+6580910054", "+123456789012345"):
            with self.subTest(number=number):
                self.assertTrue(is_valid_phone_number(number))
                self.assertEqual(validate_phone_number(number), number)

    def test_invalid_numbers(self):
        for number in ("", "+", "+1", "6580910054", "+0580910054", "+1234567890123456",
                       "+65 8091 0054", "+6580910054\n", None):
            with self.subTest(number=number):
                self.assertFalse(is_valid_phone_number(number))

    def test_validate_raises(self):
        with self.assertRaises(InvalidPhoneNumberError) as ctx:
            validate_phone_number("12345")
        self.assertIn("international format", str(ctx.exception))
        self.assertEqual(ctx.exception.phone_number, "12345")


class TestModels(unittest.TestCase):

    def test_error_kind_from_status(self):
        self.assertEqual(ErrorKind.from_status(401), ErrorKind.AUTH)
        self.assertEqual(ErrorKind.from_status(422), ErrorKind.INVALID_REQUEST)
        self.assertEqual(ErrorKind.from_status(None), ErrorKind.UNKNOWN)

    def test_error_type_classification(self):
        self.assertEqual(ErrorKind.INVALID_REQUEST.error_type, "ACCESS_DENIED")
        self.assertEqual(ErrorKind.ACCESS_DENIED.error_type, "ACCESS_DENIED")
        self.assertEqual(ErrorKind.AUTH.error_type, "AUTH")
        self.assertEqual(ErrorKind.NOT_FOUND.error_type, "NOT_FOUND")
        self.assertEqual(ErrorKind.PROTOCOL.error_type, "UNKNOWN")

    def test_fetch_result_requires_exactly_one_shape(self):
        group = Group(uuid="g")
        with self.assertRaises(ValueError):
            FetchResult(group=group)
        with self.assertRaises(ValueError):
            FetchResult(group=group, messages=[], error_kind=ErrorKind.AUTH)

    def test_parse_timestamp(self):
        self.assertEqual(parse_timestamp("2024-01-15T10:30:00Z").utcoffset().total_seconds(), 0)
        self.assertIsNone(parse_timestamp("not a date"))
        self.assertIsNone(parse_timestamp(None))


if __name__ == "__main__":
    unittest.main()

"""Unit tests for metadata.py module."""

import datetime
import unittest

from mdsite.app import errors, metadata


class TestMetadataExtractor(unittest.TestCase):
    """Tests for MetadataExtractor."""

    def setUp(self) -> None:
        self.m = metadata.MetadataExtractor(
            {
                'title': 'Hello',
                'featured': True,
                'count': 3,
                'pubdate': datetime.date(2024, 1, 2),
                'iso': '2024-03-04',
                'iso_time': '2024-03-04T10:00:00',
                'stamp': datetime.datetime(2024, 1, 2, 12, 0, 0),
                'bad': 'not a date',
            },
            'hello',
        )

    def test_get_bool_default_when_absent(self) -> None:
        """get_bool returns the default for a missing key."""
        self.assertFalse(self.m.get_bool('draft', False))
        self.assertTrue(self.m.get_bool('draft', True))

    def test_get_bool_present(self) -> None:
        """get_bool returns the stored value."""
        self.assertTrue(self.m.get_bool('featured', False))

    def test_get_bool_wrong_type(self) -> None:
        """A non-bool value is a type error naming the key and label."""
        with self.assertRaises(errors.FieldTypeError) as ctx:
            self.m.get_bool('title', False)
        self.assertEqual(ctx.exception.key, 'title')
        self.assertIn('[hello]', str(ctx.exception))

    def test_get_string(self) -> None:
        """get_string returns the value or the default."""
        self.assertEqual(self.m.get_string('title', 'x'), 'Hello')
        self.assertEqual(self.m.get_string('missing', 'x'), 'x')

    def test_get_string_wrong_type(self) -> None:
        """Numbers are not accepted as strings."""
        with self.assertRaises(errors.FieldTypeError):
            self.m.get_string('count', '')

    def test_require_string_missing(self) -> None:
        """require_string raises MissingFieldError for an absent key."""
        with self.assertRaises(errors.MissingFieldError) as ctx:
            self.m.require_string('heading')
        self.assertEqual(ctx.exception.key, 'heading')
        self.assertEqual(ctx.exception.label, 'hello')
        self.assertEqual(str(ctx.exception), 'heading is required [hello]')

    def test_get_date_absent(self) -> None:
        """get_date returns an empty display string and zero timestamp."""
        self.assertEqual(self.m.get_date('updated'), ('', 0))

    def test_require_date_from_date(self) -> None:
        """YAML dates become a long-form string and midnight UTC timestamp."""
        display, ts = self.m.require_date('pubdate')
        self.assertEqual(display, 'January 2, 2024')
        self.assertEqual(ts, 1704153600)

    def test_require_date_from_iso_string(self) -> None:
        """ISO date strings are parsed."""
        display, ts = self.m.require_date('iso')
        self.assertEqual(display, 'March 4, 2024')
        self.assertEqual(ts, 1709510400)

    def test_require_date_from_datetime(self) -> None:
        """Naive datetimes are treated as UTC."""
        display, ts = self.m.require_date('stamp')
        self.assertEqual(display, 'January 2, 2024')
        self.assertEqual(ts, 1704153600 + 12 * 3600)

    def test_require_date_missing(self) -> None:
        """require_date raises MissingFieldError for an absent key."""
        with self.assertRaises(errors.MissingFieldError):
            self.m.require_date('updated')

    def test_require_date_invalid(self) -> None:
        """Unparsable values raise InvalidDateError carrying the raw value."""
        with self.assertRaises(errors.InvalidDateError) as ctx:
            self.m.require_date('bad')
        self.assertEqual(ctx.exception.raw, 'not a date')

    def test_require_date_rejects_time_in_string(self) -> None:
        """Date strings are date-only; a time component is invalid."""
        with self.assertRaises(errors.InvalidDateError) as ctx:
            self.m.require_date('iso_time')
        self.assertEqual(ctx.exception.key, 'iso_time')

    def test_get_date_invalid_type(self) -> None:
        """Non-date, non-string values are invalid dates."""
        with self.assertRaises(errors.InvalidDateError):
            self.m.get_date('count')


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sentry_dingding.utils import dig, find_header, format_datetime, normalize_pairs, pick_first_nonempty


class TestNormalizePairs(unittest.TestCase):
    def test_mapping_and_pairs_are_equivalent(self):
        self.assertEqual(
            normalize_pairs({'release': '1.2', 'browser': 'Chrome'}),
            normalize_pairs([['release', '1.2'], ['browser', 'Chrome']]),
        )

    def test_key_value_objects(self):
        self.assertEqual(normalize_pairs([{'key': 'os', 'value': 'Linux'}]), {'os': 'Linux'})

    def test_skips_empty_and_malformed_items(self):
        pairs = [['a', ''], [None, 'x'], ['b'], 'c', ['d', None], ['e', 'ok']]
        self.assertEqual(normalize_pairs(pairs), {'e': 'ok'})

    def test_skips_falsy_values(self):
        pairs = [['release', 0], ['os', []], ['device', {}], ['version', '0'], ['browser', 'Chrome']]
        self.assertEqual(normalize_pairs(pairs), {'version': '0', 'browser': 'Chrome'})
        self.assertEqual(normalize_pairs({'release': 0, 'browser': 'Chrome'}), {'browser': 'Chrome'})

    def test_non_collection_returns_empty(self):
        self.assertEqual(normalize_pairs(None), {})
        self.assertEqual(normalize_pairs('release=1'), {})


class TestFindHeader(unittest.TestCase):
    def test_case_insensitive(self):
        self.assertEqual(find_header({'User-Agent': 'x'}, 'user-agent'), 'x')
        self.assertEqual(find_header([['user-agent', 'y']], 'User-Agent'), 'y')

    def test_missing(self):
        self.assertEqual(find_header([], 'user-agent'), '')
        self.assertEqual(find_header(None, 'user-agent'), '')


class TestDig(unittest.TestCase):
    def test_nested_access(self):
        data = {'exception': {'values': [{'type': 'E'}]}}
        self.assertEqual(dig(data, 'exception', 'values', 0, 'type'), 'E')

    def test_tolerates_missing_and_wrong_types(self):
        self.assertIsNone(dig({}, 'data', 'error'))
        self.assertIsNone(dig({'data': 'x'}, 'data', 'error'))
        self.assertIsNone(dig({'values': []}, 'values', 0))
        self.assertIsNone(dig(None, 'a'))


class TestFormatDatetime(unittest.TestCase):
    def test_naive_datetime_is_local_time(self):
        self.assertEqual(format_datetime('2024-01-15T10:30:00'), '2024/1/15 10:30:00')

    def test_utc_designator_is_accepted(self):
        self.assertRegex(format_datetime('2024-01-15T10:30:00.123Z'), r'^2024/1/1[456] \d{2}:\d{2}:00$')

    def test_invalid_value_is_returned_as_is(self):
        self.assertEqual(format_datetime('not-a-date'), 'not-a-date')

    def test_missing_value_uses_now(self):
        self.assertRegex(format_datetime(None), r'^\d{4}/\d{1,2}/\d{1,2} \d{2}:\d{2}:\d{2}$')

    def test_out_of_range_datetime_is_returned_as_is(self):
        for value in ('0001-01-01T00:00:00+14:00', '9999-12-31T23:59:59-14:00'):
            self.assertEqual(format_datetime(value), value)

    def test_zero_uses_now(self):
        self.assertFalse(format_datetime(0).startswith('1970/'))
        self.assertRegex(format_datetime(0), r'^\d{4}/\d{1,2}/\d{1,2} \d{2}:\d{2}:\d{2}$')

    def test_epoch_seconds(self):
        self.assertRegex(format_datetime(1705314600), r'^2024/1/1[456] \d{2}:\d{2}:00$')


class TestPickFirstNonempty(unittest.TestCase):
    def test_picks_first_meaningful(self):
        self.assertEqual(pick_first_nonempty(None, '', '  ', 'x', 'y'), 'x')
        self.assertEqual(pick_first_nonempty(None, ''), '')


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
import os
import sys
import unittest
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sentry_dingding.services import build_dingding_message, send_dingding_payload


class TestDingDingService(unittest.TestCase):
    def test_envelope(self):
        self.assertEqual(build_dingding_message('texto'), {
            'msgtype': 'markdown',
            'markdown': {'title': '🚨 Sentry 告警', 'text': 'texto'},
        })

    @patch('sentry_dingding.services.requests.post')
    def test_send_posts_once_with_timeout(self, mock_post):
        mock_post.return_value = MagicMock(status_code=200, text='{"errcode":0,"errmsg":"ok"}')

        resp = send_dingding_payload('https://hook', 'corpo')

        self.assertEqual(resp.status_code, 200)
        mock_post.assert_called_once_with(
            'https://hook',
            json=build_dingding_message('corpo'),
            headers={'Content-Type': 'application/json'},
            timeout=10,
        )

    @patch('sentry_dingding.services.requests.post')
    def test_errors_propagate(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError('refused')
        with self.assertRaises(requests.exceptions.ConnectionError):
            send_dingding_payload('https://hook', 'corpo')


if __name__ == '__main__':
    unittest.main()

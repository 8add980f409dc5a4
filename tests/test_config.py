#!/usr/bin/env python3
"""Tests for gamehub.config and gamehub.log."""
import json
import logging
import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gamehub.config import DEFAULT_CONFIG, load_config
from gamehub.log import setup_logging


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _write(self, data) -> str:
        path = os.path.join(self.tmp, 'config.json')
        with open(path, 'w') as f:
            f.write(data if isinstance(data, str) else json.dumps(data))
        return path

    def test_defaults(self):
        config = load_config(environ={})
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertEqual(config['token_ttl_hours'], 24)
        self.assertEqual(config['max_upload_bytes'], 5 * 1024 * 1024)

    def test_file_overrides_defaults(self):
        config = load_config(self._write({'data_dir': '/srv/data', 'port': 8080}), environ={})
        self.assertEqual(config['data_dir'], '/srv/data')
        self.assertEqual(config['port'], 8080)

    def test_environment_overrides_file(self):
        path = self._write({'port': 8080})
        config = load_config(path, environ={'GAMEHUB_PORT': '9000',
                                            'GAMEHUB_TOKEN_TTL_HOURS': '1.5'})
        self.assertEqual(config['port'], 9000)
        self.assertEqual(config['token_ttl_hours'], 1.5)

    def test_jwt_secret_fallback(self):
        self.assertEqual(load_config(environ={'JWT_SECRET': 's1'})['secret_key'], 's1')
        config = load_config(environ={'JWT_SECRET': 's1', 'GAMEHUB_SECRET_KEY': 's2'})
        self.assertEqual(config['secret_key'], 's2')

    def test_missing_file_uses_defaults(self):
        config = load_config(os.path.join(self.tmp, 'nope.json'), environ={})
        self.assertEqual(config['data_dir'], 'data')

    def test_invalid_json_raises(self):
        with self.assertRaises(ValueError):
            load_config(self._write('{nope'), environ={})

    def test_invalid_env_value_raises(self):
        with self.assertRaises(ValueError):
            load_config(environ={'GAMEHUB_PORT': 'eighty'})


class TestSetupLogging(unittest.TestCase):

    def test_sets_level(self):
        logger = setup_logging('DEBUG')
        self.assertEqual(logger.name, 'gamehub')
        self.assertEqual(logger.level, logging.DEBUG)
        setup_logging('INFO')

    def test_handlers_not_duplicated(self):
        setup_logging('INFO')
        count = len(logging.getLogger('gamehub').handlers)
        setup_logging('INFO')
        self.assertEqual(len(logging.getLogger('gamehub').handlers), count)


if __name__ == '__main__':
    unittest.main()

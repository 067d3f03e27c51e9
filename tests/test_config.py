"""
Unit tests for ghrepo.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path

import yaml

from ghrepo.exit_codes import ConfigError, CONFIG_ERROR
from ghrepo.config import (
    DEFAULT_CLIENT_ID,
    apply_env_overrides,
    configure_logging,
    get_config_path,
    get_default_config,
    load_config,
    merge_configs,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        self.original_env = {k: os.environ.get(k) for k in ('HOME', 'GHREPO_CONFIG')}
        os.environ['HOME'] = self.temp_dir
        os.environ.pop('GHREPO_CONFIG', None)
        self.config_dir = Path(self.temp_dir) / '.ghrepo'

    def tearDown(self):
        """Clean up test environment"""
        for key, value in self.original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        for key in [k for k in os.environ if k.startswith('GHREPO_GITHUB_')]:
            del os.environ[key]
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertEqual(config['github']['client_id'], DEFAULT_CLIENT_ID)
        self.assertEqual(config['github']['scopes'], ['repo'])
        self.assertEqual(config['github']['per_page'], 100)
        self.assertEqual(config['credentials']['path'], '~/.ghreporc.yml')
        self.assertIn('level', config['logging'])
        self.assertTrue(config['display']['progress_bar'])

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_load_config_yaml_file(self):
        """Test loading config from YAML file"""
        self.config_dir.mkdir()
        with open(self.config_dir / 'config.yaml', 'w') as f:
            yaml.safe_dump({'github': {'api_url': 'https://ghe.example.com/api/v3'}}, f)

        config = load_config()

        self.assertEqual(config['github']['api_url'], 'https://ghe.example.com/api/v3')
        # Untouched keys keep their defaults
        self.assertEqual(config['github']['per_page'], 100)

    def test_load_config_json_file(self):
        """Test loading config from JSON file"""
        self.config_dir.mkdir()
        with open(self.config_dir / 'config.json', 'w') as f:
            json.dump({'logging': {'level': 'DEBUG'}}, f)

        config = load_config()
        self.assertEqual(config['logging']['level'], 'DEBUG')

    def test_load_config_toml_file(self):
        """Test loading config from TOML file"""
        self.config_dir.mkdir()
        (self.config_dir / 'config.toml').write_text('[display]\nprogress_bar = false\n')

        config = load_config()
        self.assertFalse(config['display']['progress_bar'])

    def test_explicit_config_path(self):
        """GHREPO_CONFIG points at a file outside the config directory"""
        path = Path(self.temp_dir) / 'custom.yml'
        path.write_text('credentials:\n  path: /tmp/creds.yml\n')
        os.environ['GHREPO_CONFIG'] = str(path)

        self.assertEqual(get_config_path(), path)
        self.assertEqual(load_config()['credentials']['path'], '/tmp/creds.yml')

    def test_invalid_file_falls_back_to_defaults(self):
        """A malformed config file is reported and ignored"""
        self.config_dir.mkdir()
        (self.config_dir / 'config.json').write_text('{not json')

        with self.assertLogs('ghrepo', level='ERROR'):
            config = load_config()
        self.assertEqual(config, get_default_config())

    def test_explicit_config_malformed_raises(self):
        """A broken GHREPO_CONFIG file stops the run with CONFIG_ERROR"""
        path = Path(self.temp_dir) / 'custom.yml'
        path.write_text('github: [unclosed\n')
        os.environ['GHREPO_CONFIG'] = str(path)

        with self.assertRaises(ConfigError) as ctx:
            load_config()
        self.assertEqual(ctx.exception.exit_code, CONFIG_ERROR)

    def test_explicit_config_not_a_mapping_raises(self):
        path = Path(self.temp_dir) / 'custom.json'
        path.write_text('[1, 2]')
        os.environ['GHREPO_CONFIG'] = str(path)

        with self.assertRaises(ConfigError):
            load_config()

    def test_explicit_config_missing_raises(self):
        os.environ['GHREPO_CONFIG'] = str(Path(self.temp_dir) / 'nope.yaml')

        with self.assertRaises(ConfigError) as ctx:
            load_config()
        self.assertIn('does not exist', str(ctx.exception))

    def test_env_overrides(self):
        """Environment variables override nested keys"""
        os.environ['GHREPO_GITHUB_PER_PAGE'] = '50'
        os.environ['GHREPO_GITHUB_API_URL'] = 'https://ghe.example.com/api/v3'

        config = apply_env_overrides(get_default_config())

        self.assertEqual(config['github']['per_page'], 50)
        self.assertEqual(config['github']['api_url'], 'https://ghe.example.com/api/v3')

    def test_env_override_boolean(self):
        os.environ['GHREPO_DISPLAY_PROGRESS_BAR'] = 'false'
        try:
            config = apply_env_overrides(get_default_config())
        finally:
            del os.environ['GHREPO_DISPLAY_PROGRESS_BAR']
        self.assertFalse(config['display']['progress_bar'])


class TestMergeConfigs(unittest.TestCase):

    def test_nested_merge(self):
        base = {'a': {'x': 1, 'y': 2}, 'b': 1}
        merged = merge_configs(base, {'a': {'y': 3}, 'c': 4})

        self.assertEqual(merged, {'a': {'x': 1, 'y': 3}, 'b': 1, 'c': 4})
        self.assertEqual(base['a']['y'], 2)

    def test_scalar_replaces_mapping(self):
        self.assertEqual(merge_configs({'a': {'x': 1}}, {'a': None}), {'a': None})


class TestConfigureLogging(unittest.TestCase):

    def tearDown(self):
        logging.getLogger('ghrepo').setLevel(logging.INFO)

    def test_level_from_config(self):
        config = get_default_config()
        config['logging']['level'] = 'warning'

        self.assertEqual(configure_logging(config), logging.WARNING)
        self.assertEqual(logging.getLogger('ghrepo').level, logging.WARNING)

    def test_verbose_wins(self):
        self.assertEqual(configure_logging(get_default_config(), verbose=True), logging.DEBUG)

    def test_unknown_level_defaults_to_info(self):
        config = get_default_config()
        config['logging']['level'] = 'chatty'
        self.assertEqual(configure_logging(config), logging.INFO)


if __name__ == '__main__':
    unittest.main()

import os
import tempfile
import unittest
from unittest.mock import patch, mock_open
from pathlib import Path

import yaml

from brew_provisioner.config_service import ConfigurationService, DEFAULT_RUNTIME_CANDIDATES

class TestConfigurationService(unittest.TestCase):

    def _get_test_config(self):
        return {
            'brew': {'binary_path': '/opt/homebrew/bin/brew'},
            'runtime': {'link_path': '/opt/homebrew/bin/php', 'candidates': ['php71', 'php70']},
            'sudoers': {'directory': '/tmp/sudoers.d', 'file_name': 'brew', 'group': 'staff'},
        }

    @patch('brew_provisioner.config_service.Path.home')
    @patch('brew_provisioner.config_service.Path.mkdir')
    @patch('brew_provisioner.config_service.yaml.dump')
    @patch('brew_provisioner.config_service.yaml.safe_load')
    @patch('brew_provisioner.config_service.Path.exists')
    @patch('builtins.open', new_callable=mock_open)
    def test_local_config_file_wins(self, mock_open_m, mock_path_exists, mock_yaml_safe_load, mock_yaml_dump, mock_mkdir, mock_path_home):
        """A config.yaml in the working directory is used as-is."""
        mock_path_home.return_value = Path("/fake/home")
        # 1. local config exists, 2. _load_config sees it exists
        mock_path_exists.side_effect = [True, True]
        mock_yaml_safe_load.return_value = self._get_test_config()

        service = ConfigurationService(config_file_name="config.yaml", app_name="test_app")

        mock_open_m.assert_called_once_with(Path("config.yaml"), 'r')
        self.assertEqual(service.get('sudoers', 'group'), 'staff')
        mock_mkdir.assert_not_called()
        mock_yaml_dump.assert_not_called()

    @patch('brew_provisioner.config_service.Path.home')
    @patch('brew_provisioner.config_service.Path.mkdir')
    @patch('brew_provisioner.config_service.yaml.dump')
    @patch('brew_provisioner.config_service.Path.exists')
    @patch('builtins.open', new_callable=mock_open)
    def test_defaults_are_saved_to_home_when_no_file_exists(self, mock_open_m, mock_path_exists, mock_yaml_dump, mock_mkdir, mock_path_home):
        mock_path_home.return_value = Path("/fake/home")
        mock_path_exists.return_value = False

        service = ConfigurationService(config_file_name="provision.yaml", app_name="Brew Provisioner")

        expected_path = Path("/fake/home") / ".brew_provisioner" / "provision.yaml"
        self.assertEqual(mock_path_exists.call_count, 2)
        mock_mkdir.assert_any_call(parents=True, exist_ok=True)
        mock_open_m.assert_called_once_with(expected_path, 'w')
        mock_yaml_dump.assert_called_once_with(service.get_config(), mock_open_m(), default_flow_style=False)

    def test_default_values(self):
        with patch('brew_provisioner.config_service.Path.exists', return_value=False), \
             patch('builtins.open', mock_open()), \
             patch('brew_provisioner.config_service.Path.mkdir'), \
             patch('brew_provisioner.config_service.Path.home', return_value=Path("/fake/home")):
            service = ConfigurationService()

        self.assertEqual(service.get('brew', 'binary_path'), '/usr/local/bin/brew')
        self.assertEqual(service.get('runtime', 'link_path'), '/usr/local/bin/php')
        self.assertEqual(service.get('runtime', 'candidates'), ['php71', 'php70', 'php56', 'php55'])
        self.assertEqual(service.get('sudoers', 'directory'), '/etc/sudoers.d')
        self.assertEqual(service.get('sudoers', 'file_name'), 'brew')
        self.assertEqual(service.get('sudoers', 'group'), 'admin')

    def test_defaults_do_not_share_the_candidate_list(self):
        with patch('brew_provisioner.config_service.Path.exists', return_value=False), \
             patch('builtins.open', mock_open()), \
             patch('brew_provisioner.config_service.Path.mkdir'), \
             patch('brew_provisioner.config_service.Path.home', return_value=Path("/fake/home")):
            service = ConfigurationService()

        service.get('runtime', 'candidates').append('php72')
        self.assertEqual(DEFAULT_RUNTIME_CANDIDATES, ['php71', 'php70', 'php56', 'php55'])

    def test_get_walks_nested_keys(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            config_path = Path(tmp_dir) / "config.yaml"
            with open(config_path, 'w') as f:
                yaml.dump(self._get_test_config(), f)

            cwd = os.getcwd()
            os.chdir(tmp_dir)
            try:
                with patch('brew_provisioner.config_service.Path.home', return_value=Path(tmp_dir)):
                    service = ConfigurationService()
            finally:
                os.chdir(cwd)

        self.assertEqual(service.get('runtime', 'candidates'), ['php71', 'php70'])
        self.assertEqual(service.get('brew', 'binary_path'), '/opt/homebrew/bin/brew')
        self.assertIsNone(service.get('runtime', 'missing'))
        self.assertEqual(service.get('brew', 'binary_path', 'deeper', default='x'), 'x')
        self.assertEqual(service.get('nope', default='fallback'), 'fallback')

    def test_empty_file_is_replaced_with_defaults(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            home = Path(tmp_dir)
            config_path = home / ".brew_provisioner" / "config.yaml"
            config_path.parent.mkdir()
            config_path.write_text("")

            with patch('brew_provisioner.config_service.Path.home', return_value=home):
                cwd = os.getcwd()
                os.chdir(tmp_dir)
                try:
                    service = ConfigurationService()
                finally:
                    os.chdir(cwd)

            with open(config_path) as f:
                saved = yaml.safe_load(f)

        self.assertEqual(service.get('sudoers', 'group'), 'admin')
        self.assertEqual(saved, service.get_config())

    def test_application_version_from_version_file(self):
        version_file = Path(__file__).resolve().parent.parent / "VERSION"
        with open(version_file) as f:
            expected = f.read().strip()

        self.assertEqual(ConfigurationService.get_application_version(), expected)

if __name__ == '__main__':
    unittest.main()

import json
import os
import tempfile
import unittest

import yaml

from config.configuration_provider import ConfigurationProvider
from config.configuration_sources import (
    DefaultConfigurationSource, FileConfigurationSource, EnvironmentConfigurationSource
)
from interfaces.configuration_interface import ConfigurationError, ConfigurationSource


class TestConfigurationProvider(unittest.TestCase):
    def setUp(self):
        # Clear any environment variables that could interfere
        self._saved_env = {k: v for k, v in os.environ.items() if k.startswith('FLEET_CLIENT_')}
        for k in self._saved_env:
            del os.environ[k]
        self._temp_files = []

    def tearDown(self):
        for k in list(os.environ.keys()):
            if k.startswith('FLEET_CLIENT_'):
                del os.environ[k]
        os.environ.update(self._saved_env)
        for path in self._temp_files:
            os.unlink(path)

    def _write_temp(self, suffix, content):
        handle = tempfile.NamedTemporaryFile('w', suffix=suffix, delete=False)
        with handle:
            handle.write(content)
        self._temp_files.append(handle.name)
        return handle.name

    def test_default_config_loaded(self):
        provider = ConfigurationProvider()
        robot_config = provider.get_robot_config()
        navigation_config = provider.get_navigation_config()
        client_config = provider.get_client_config()
        self.assertEqual(robot_config.fleet_name, 'fleet_name')
        self.assertEqual(robot_config.map_frame, 'map')
        self.assertEqual(robot_config.robot_frame, 'base_footprint')
        self.assertEqual(client_config.update_frequency, 10.0)
        self.assertEqual(client_config.publish_frequency, 1.0)
        self.assertEqual(navigation_config.max_dist_to_first_waypoint, 10.0)
        self.assertEqual(navigation_config.max_goal_retries, 5)
        self.assertEqual(navigation_config.goal_parameters, '{rotational_goal_tolerance: 3.14}')
        self.assertEqual(provider.errors, [])

    def test_env_override(self):
        os.environ['FLEET_CLIENT_ROBOT_ROBOT_NAME'] = 'robot_7'
        os.environ['FLEET_CLIENT_NAVIGATION_MAX_GOAL_RETRIES'] = '3'
        provider = ConfigurationProvider()
        self.assertEqual(provider.get_robot_config().robot_name, 'robot_7')
        self.assertEqual(provider.get_navigation_config().max_goal_retries, 3)
        self.assertEqual(provider.get_value('robot.robot_name').source, ConfigurationSource.ENVIRONMENT)
        self.assertEqual(provider.errors, [])

    def test_invalid_config_validation(self):
        os.environ['FLEET_CLIENT_CLIENT_UPDATE_FREQUENCY'] = '-1.0'  # Invalid
        os.environ['FLEET_CLIENT_NAVIGATION_MAX_GOAL_RETRIES'] = '0'  # Invalid
        provider = ConfigurationProvider()
        errors = provider.errors
        self.assertTrue(any('update_frequency' in e for e in errors))
        self.assertTrue(any('max_goal_retries' in e for e in errors))

    def test_invalid_log_level(self):
        provider = ConfigurationProvider()
        provider.set_value('system.log_level', 'LOUD')
        self.assertTrue(any('log_level' in e for e in provider.errors))

    def test_set_value_and_reload(self):
        provider = ConfigurationProvider()
        provider.set_value('navigation.max_dist_to_first_waypoint', 3.0)
        self.assertEqual(provider.get_navigation_config().max_dist_to_first_waypoint, 3.0)
        provider.reload()
        self.assertEqual(provider.get_navigation_config().max_dist_to_first_waypoint, 3.0)
        self.assertEqual(provider.get_value('navigation.max_dist_to_first_waypoint').source,
                         ConfigurationSource.OVERRIDE)

    def test_get_value_metadata(self):
        provider = ConfigurationProvider()
        val = provider.get_value('client.wait_timeout')
        self.assertEqual(val.value, 10.0)
        self.assertEqual(val.key, 'client.wait_timeout')
        self.assertEqual(val.source, ConfigurationSource.DEFAULT)
        self.assertIsInstance(val.description, str)

    def test_yaml_file_source(self):
        path = self._write_temp('.yaml', yaml.safe_dump({
            'robot': {'fleet_name': 'fleet_a', 'robot_name': 'robot_1'},
            'client': {'publish_frequency': 2.0},
        }))
        provider = ConfigurationProvider(config_file=path)
        self.assertEqual(provider.get_robot_config().fleet_name, 'fleet_a')
        self.assertEqual(provider.get_robot_config().robot_name, 'robot_1')
        self.assertEqual(provider.get_client_config().publish_frequency, 2.0)
        self.assertEqual(provider.get_value('robot.fleet_name').source, ConfigurationSource.FILE)

    def test_env_wins_over_file(self):
        path = self._write_temp('.json', json.dumps({'robot': {'robot_name': 'from_file'}}))
        os.environ['FLEET_CLIENT_ROBOT_ROBOT_NAME'] = 'from_env'
        provider = ConfigurationProvider(config_file=path)
        self.assertEqual(provider.get_robot_config().robot_name, 'from_env')

    def test_missing_file_falls_back_to_defaults(self):
        provider = ConfigurationProvider(config_file='/nonexistent/fleet_client.yaml')
        self.assertEqual(provider.get_robot_config().robot_name, 'robot_name')

    def test_file_source_errors(self):
        with self.assertRaises(ConfigurationError):
            FileConfigurationSource('/nonexistent/fleet_client.yaml').load_configuration()

    def test_client_node_config_bundles_sections(self):
        provider = ConfigurationProvider(sources=[DefaultConfigurationSource()])
        config = provider.get_client_node_config()
        self.assertEqual(config.robot, provider.get_robot_config())
        self.assertEqual(config.navigation, provider.get_navigation_config())
        self.assertEqual(config.system.log_level, 'INFO')


class TestEnvironmentConfigurationSource(unittest.TestCase):
    def test_key_conversion_and_parsing(self):
        source = EnvironmentConfigurationSource(prefix='TEST_FC_')
        self.assertEqual(source._convert_env_key_to_config_key('TEST_FC_CLIENT_WAIT_TIMEOUT'),
                         'client.wait_timeout')
        self.assertEqual(source._parse_env_value('2.5'), 2.5)
        self.assertEqual(source._parse_env_value('true'), True)
        self.assertEqual(source._parse_env_value('True'), True)
        self.assertEqual(source._parse_env_value('dock_A'), 'dock_A')


if __name__ == '__main__':
    unittest.main()

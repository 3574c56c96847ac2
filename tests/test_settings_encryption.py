import os
import sys
import unittest
import keyring
import yaml
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig, load_settings

class DummyKeyring(keyring.backend.KeyringBackend):
    priority = 1
    def __init__(self):
        self.store = {}
    def get_password(self, service, username):
        return self.store.get((service, username))
    def set_password(self, service, username, password):
        self.store[(service, username)] = password
    def delete_password(self, service, username):
        self.store.pop((service, username), None)

class SettingsEncryptionTest(unittest.TestCase):
    def setUp(self) -> None:
        keyring.set_keyring(DummyKeyring())
        os.environ['ENCRYPT_SETTINGS'] = '1'
        self.path = 'enc_settings.yaml'
        if os.path.exists(self.path):
            os.remove(self.path)

    def tearDown(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
        os.environ.pop('ENCRYPT_SETTINGS', None)

    def test_encrypt_and_load(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.save({'jwt_secret': 'super-secret', 'log_level': 'DEBUG'})
        self.assertTrue(os.path.exists(self.path))
        with open(self.path, encoding='utf-8') as f:
            raw = yaml.safe_load(f)
        self.assertNotEqual(raw['jwt_secret'], 'super-secret')
        data = cfg.load()
        self.assertEqual(data['jwt_secret'], 'super-secret')
        self.assertEqual(data['log_level'], 'DEBUG')

    def test_load_settings_uses_secret_from_keyring(self) -> None:
        YamlConfig(self.path).save({'jwt_secret': 'from-keyring', 'port': 9000})
        settings = load_settings(self.path)
        self.assertEqual(settings.jwt_secret, 'from-keyring')
        self.assertEqual(settings.port, 9000)


class LoadSettingsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.path = 'plain_settings.yaml'
        self.saved_env = {k: os.environ.pop(k, None) for k in ('PORT', 'DB_FILE', 'HERACLES_DB_FILE', 'ENCRYPT_SETTINGS')}

    def tearDown(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
        for key, value in self.saved_env.items():
            os.environ.pop(key, None)
            if value is not None:
                os.environ[key] = value

    def test_defaults_without_file(self) -> None:
        settings = load_settings('missing_settings.yaml')
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.token_expire_days, 7)

    def test_env_overrides_file(self) -> None:
        YamlConfig(self.path).save({'port': 9000, 'db_file': 'file.sqlite'})
        os.environ['PORT'] = '9100'
        os.environ['DB_FILE'] = 'env.sqlite'
        settings = load_settings(self.path)
        self.assertEqual(settings.port, 9100)
        self.assertEqual(settings.db_file, 'env.sqlite')
        self.assertEqual(load_settings(self.path, db_file='arg.sqlite').db_file, 'arg.sqlite')

    def test_invalid_settings(self) -> None:
        YamlConfig(self.path).save({'port': 0})
        with self.assertRaises(ValueError):
            load_settings(self.path)

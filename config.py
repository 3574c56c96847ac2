import os
import yaml
import keyring

from settings_schema import SettingsSchema, validate_settings

APP_VERSION = "1.0.0"


class YamlConfig:
    """Load and save settings to a YAML file with optional encryption."""

    SENSITIVE_KEYS = {
        "jwt_secret",
        "admin_password",
    }

    ENV_KEYS = {
        "db_file": ("HERACLES_DB_FILE", "DB_FILE"),
        "port": ("PORT",),
        "jwt_secret": ("JWT_SECRET",),
        "admin_email": ("ADMIN_EMAIL",),
        "admin_name": ("ADMIN_NAME",),
        "admin_password": ("ADMIN_PASSWORD",),
        "log_level": ("LOG_LEVEL",),
    }

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path
        self.encrypt = os.environ.get("ENCRYPT_SETTINGS") == "1"
        self.service = "heracles"

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if self.encrypt:
            for key in list(data.keys()):
                if key in self.SENSITIVE_KEYS:
                    secret = keyring.get_password(self.service, key)
                    if secret is not None:
                        data[key] = secret
                    else:
                        data.pop(key, None)
        return data

    def save(self, data: dict) -> None:
        out = dict(data)
        if self.encrypt:
            for key in self.SENSITIVE_KEYS:
                if key in out:
                    keyring.set_password(self.service, key, str(out[key]))
                    out[key] = True
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)

    def env_overrides(self) -> dict:
        """Return settings supplied through environment variables."""
        found: dict = {}
        for key, names in self.ENV_KEYS.items():
            for name in names:
                value = os.environ.get(name)
                if value:
                    found[key] = value
                    break
        return found


def load_settings(path: str = "settings.yaml", **overrides) -> SettingsSchema:
    """Merge the YAML file, environment and explicit overrides, then validate."""
    cfg = YamlConfig(path)
    data = cfg.load()
    data.update(cfg.env_overrides())
    data.update({k: v for k, v in overrides.items() if v is not None})
    return validate_settings(data)

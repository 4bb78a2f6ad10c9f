import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"
SECRET_ENV = "TID_SECRET"


class CodecConfig:
    __slots__ = ("default_version", "secret")

    def __init__(self, default_version=0, secret=""):
        self.default_version = default_version
        self.secret = secret


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("codec", "server", "logging")

    def __init__(self, codec=None, server=None, logging=None):
        self.codec = codec or CodecConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            CodecConfig(**d.get("codec", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if config_path.exists():
        with open(config_path) as file:
            config = Config.from_dict(json.load(file))
    else:
        config = Config()

    # keyed derivation secret stays out of config files where possible
    secret = os.environ.get(SECRET_ENV)
    if secret:
        config.codec.secret = secret
    return config

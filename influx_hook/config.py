"""Configuration module: frozen dataclass loaded from YAML, env vars and CLI args."""

import os
import sys
from dataclasses import dataclass, field, fields

import yaml


def parse_tags(value: str) -> dict[str, str]:
    """Parse ``k=v,k=v`` into a dict. Empty input gives an empty dict."""
    tags: dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"Tag must look like key=value, got {item!r}")
        key, val = item.split("=", 1)
        tags[key.strip()] = val.strip()
    return tags


@dataclass(frozen=True)
class Config:
    host: str = "localhost"
    port: int = 8086
    database: str = "logrus"
    tags: dict[str, str] = field(default_factory=dict)
    timeout: float = 0.1
    username: str | None = None
    password: str | None = None
    retention_policy: str = "default"
    log_file: str | None = None


_FIELD_NAMES = {f.name for f in fields(Config)}


def load_yaml(path: str) -> dict:
    """Load a YAML config file; keys are Config field names."""
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    unknown = set(data) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")
    if data.get("tags") is None:
        data.pop("tags", None)
    elif not isinstance(data["tags"], dict):
        raise ValueError(f"tags in {path} must be a mapping, got {type(data['tags']).__name__}")
    return data


def _split_args(argv: list[str]) -> list[tuple[str, str]]:
    """Turn ``--key value`` / ``--key=value`` pairs into (key, value) tuples."""
    pairs = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--"):
            if "=" in arg:
                key, value = arg[2:].split("=", 1)
            elif i + 1 < len(argv) and not argv[i + 1].startswith("--"):
                key = arg[2:]
                value = argv[i + 1]
                i += 1
            else:
                key = arg[2:]
                value = ""
            pairs.append((key.replace("-", "_"), value))
        i += 1
    return pairs


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority)."""
    if argv is None:
        argv = sys.argv[1:]
    cli = _split_args(argv)

    kwargs: dict = {}

    config_path = os.environ.get("CONFIG_PATH")
    for key, value in cli:
        if key == "config":
            config_path = value
    if config_path:
        kwargs.update(load_yaml(config_path))

    env = os.environ
    if "INFLUX_HOST" in env:
        kwargs["host"] = env["INFLUX_HOST"]
    if "INFLUX_PORT" in env:
        kwargs["port"] = int(env["INFLUX_PORT"])
    if "INFLUX_DATABASE" in env:
        kwargs["database"] = env["INFLUX_DATABASE"]
    if "INFLUX_TAGS" in env:
        kwargs["tags"] = parse_tags(env["INFLUX_TAGS"])
    if "INFLUX_TIMEOUT" in env:
        kwargs["timeout"] = float(env["INFLUX_TIMEOUT"])
    if "INFLUX_USER" in env:
        kwargs["username"] = env["INFLUX_USER"]
    if "INFLUX_PWD" in env:
        kwargs["password"] = env["INFLUX_PWD"]
    if "INFLUX_RETENTION_POLICY" in env:
        kwargs["retention_policy"] = env["INFLUX_RETENTION_POLICY"]
    if "LOG_FILE" in env:
        kwargs["log_file"] = env["LOG_FILE"]

    cli_tags: dict[str, str] = {}
    for key, value in cli:
        if key in ("host", "database", "username", "password", "retention_policy", "log_file"):
            kwargs[key] = value
        elif key == "port":
            kwargs[key] = int(value)
        elif key == "timeout":
            kwargs[key] = float(value)
        elif key == "tag":
            cli_tags.update(parse_tags(value))
    if cli_tags:
        kwargs["tags"] = {**kwargs.get("tags", {}), **cli_tags}

    if "tags" in kwargs:
        kwargs["tags"] = {str(k): str(v) for k, v in kwargs["tags"].items()}

    return Config(**kwargs)

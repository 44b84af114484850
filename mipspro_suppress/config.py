from __future__ import annotations

import os
from dataclasses import dataclass

import yaml

from mipspro_suppress.errors import ConfigError

DEFAULT_CONFIG_PATH = "/etc/mipspro-suppress.yaml"
DEFAULT_TARGET_DIR = "/usr/bin/"

CONFIG_ENV = "MIPSPRO_SUPPRESS_CONFIG"
TARGET_DIR_ENV = "MIPSPRO_SUPPRESS_TARGET_DIR"

KNOWN_KEYS = {"target_dir"}


@dataclass(frozen=True)
class WrapperConfig:
    target_dir: str = DEFAULT_TARGET_DIR


def read_config_file(path: str) -> dict:
    # PyYAML decodes bytes itself; bad bytes surface as YAMLError.
    with open(path, "rb") as handle:
        content = handle.read()
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")
    unknown = set(data) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"config {path} has unknown keys: {', '.join(sorted(map(str, unknown)))}")
    return data


def normalize_target_dir(value: object, source: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"target_dir from {source} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ConfigError(f"target_dir from {source} must not be empty")
    return trimmed


def load_config(path: str | None = None, target_dir: str | None = None) -> WrapperConfig:
    """
    Build the effective configuration.

    The target directory comes from, in order: the `target_dir` argument (the
    `--target-dir` flag), `MIPSPRO_SUPPRESS_TARGET_DIR`, the config file, and
    finally `/usr/bin/`. The config file is `path`, else
    `MIPSPRO_SUPPRESS_CONFIG`, else `/etc/mipspro-suppress.yaml`; only the
    default location is allowed to be absent. The file is not read at all
    when the flag or the environment already decides the directory.
    """
    if target_dir is not None:
        return WrapperConfig(target_dir=normalize_target_dir(target_dir, "--target-dir"))
    env_value = os.getenv(TARGET_DIR_ENV)
    if env_value is not None:
        return WrapperConfig(target_dir=normalize_target_dir(env_value, TARGET_DIR_ENV))

    explicit = path or os.getenv(CONFIG_ENV)
    config_path = explicit or DEFAULT_CONFIG_PATH
    try:
        data = read_config_file(config_path)
    except FileNotFoundError:
        if explicit:
            raise ConfigError(f"config file not found: {config_path}") from None
        data = {}
    except OSError as exc:
        raise ConfigError(f"failed to read config {config_path}: {exc}") from exc

    if "target_dir" in data:
        return WrapperConfig(target_dir=normalize_target_dir(data["target_dir"], config_path))
    return WrapperConfig()

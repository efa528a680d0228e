"""Configuration of a judge node, loaded from a YAML document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ojjudge.status import NodeConfig


class ConfigError(ValueError):
    """The configuration cannot be read or has a value of the wrong shape."""


@dataclass
class GoJudgeConfig:
    """Where the sandbox service listens."""

    url: str = ""


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"section {key!r} must be a mapping")
    return value


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigError(f"value {key!r} must be a string")
    return str(value)


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"value {key!r} must be an integer")
    return value


@dataclass
class JudgeConfig:
    """Settings of a judge node."""

    judger: NodeConfig = field(default_factory=NodeConfig)
    go_judge: GoJudgeConfig = field(default_factory=GoJudgeConfig)
    max_job: int = 0
    judge_data: dict[str, Any] = field(default_factory=dict)
    mongo: dict[str, Any] = field(default_factory=dict)
    cf_r2: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "JudgeConfig":
        """Build a configuration from the parsed YAML mapping."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        judger = _section(data, "judger")
        go_judge = _section(data, "go-judge")
        cf_r2 = _section(data, "cf-r2")
        clients: dict[str, dict[str, Any]] = {}
        for name, client in cf_r2.items():
            if client is not None and not isinstance(client, Mapping):
                raise ConfigError(f"cf-r2 client {name!r} must be a mapping")
            clients[str(name)] = dict(client or {})
        return cls(
            judger=NodeConfig(key=_string(judger, "key"), name=_string(judger, "name")),
            go_judge=GoJudgeConfig(url=_string(go_judge, "url")),
            max_job=_integer(data, "max-job"),
            judge_data=dict(_section(data, "judge-data")),
            mongo=dict(_section(data, "mongo")),
            cf_r2=clients,
        )


def load_config(path: str | Path) -> JudgeConfig:
    """Read and parse a judge configuration file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    return JudgeConfig.from_dict(data)
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

ENV_PREFIX = "CSVBIND_"


@dataclass(frozen=True)
class Settings:
    # CSV
    delimiter: str = ","
    encoding: str = "utf-8-sig"

    # Paths
    log_dir: str = "./logs"
    report_dir: str = "./reports"

    # Logging
    log_level: str = "INFO"


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


SETTING_KEYS = ("delimiter", "encoding", "log_dir", "report_dir", "log_level")


def _read_yaml_config(path: Path) -> dict:
    if not path.exists() or not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        return {}
    return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    merged = {key: cfg.get(key, getattr(defaults, key)) for key in SETTING_KEYS}

    # 2) env
    env = {key: _env_get(f"{ENV_PREFIX}{key.upper()}") for key in SETTING_KEYS}
    if any(v is not None for v in env.values()):
        sources.append("env")
    for k, v in env.items():
        if v is not None:
            merged[k] = v

    # 3) CLI (only explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")
    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    delimiter = str(merged["delimiter"])
    if delimiter == "\\t":
        delimiter = "\t"
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    settings = Settings(
        delimiter=delimiter,
        encoding=str(merged["encoding"]),
        log_dir=str(merged["log_dir"]),
        report_dir=str(merged["report_dir"]),
        log_level=str(merged["log_level"]).upper(),
    )
    return LoadedSettings(settings=settings, sources_used=sources)


__all__ = ["Settings", "LoadedSettings", "load_settings"]

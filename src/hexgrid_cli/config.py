from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from hexgrid_cli.paths import config_path
from hexgrid_core.constants import MAX_RES

CONFIG_VERSION = "2026-10-19-hexgrid-config-v1"

DEFAULT_RESOLUTION = 9
DEFAULT_K = 1


def _int_in_range(value: Any, default: int, lo: int, hi: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return default
    if v < lo or v > hi:
        return default
    return v


@dataclass
class HexgridConfig:
    version: str
    default_resolution: int
    default_k: int

    @staticmethod
    def default() -> "HexgridConfig":
        return HexgridConfig(version=CONFIG_VERSION, default_resolution=DEFAULT_RESOLUTION, default_k=DEFAULT_K)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "HexgridConfig":
        return HexgridConfig(
            version=str(d.get("version", "")) or CONFIG_VERSION,
            default_resolution=_int_in_range(d.get("default_resolution"), DEFAULT_RESOLUTION, 0, MAX_RES),
            default_k=_int_in_range(d.get("default_k"), DEFAULT_K, 0, 1_000_000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "default_resolution": int(self.default_resolution),
            "default_k": int(self.default_k),
        }


def load_config(path: Optional[Path] = None) -> HexgridConfig:
    p = path or config_path()
    if not p.exists():
        return HexgridConfig.default()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return HexgridConfig.default()
    if not isinstance(data, dict):
        return HexgridConfig.default()
    return HexgridConfig.from_dict(data)


def save_config(cfg: HexgridConfig, path: Optional[Path] = None) -> None:
    p = path or config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(cfg.to_dict(), f, indent=2, sort_keys=True)
        f.write("\n")
    tmp.replace(p)

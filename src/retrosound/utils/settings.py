"""
音频子系统设置（AudioSettings）。

定位：
- 初始播放速度、资源归档目录前缀、音色库容量这类常量集中放在 `data/audio_settings.yaml`。
- 读取后用 pydantic 做严格校验；非法值必须失败，不做静默回退。

约束：
- `num_sounds` 上限 100：资源名里的 slot 固定两位十进制（sound00..sound99）。
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .paths import default_settings_path


class AudioSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_speed: int = Field(default=30, ge=1)
    resource_archive_dirname: str = Field(default="pyxel_resource/", min_length=1)
    num_sounds: int = Field(default=64, ge=1, le=100)


def _read_settings_dict(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"AudioSettings: 顶层必须是 dict：{path}")
    return raw


def load_audio_settings(path: Path | None = None) -> AudioSettings:
    """读取并校验设置文件；不传 path 时返回包内默认设置（带缓存）。"""

    if path is None:
        return _load_default_settings()
    if not path.exists():
        raise FileNotFoundError(f"缺少音频设置文件：{path}")
    return AudioSettings.model_validate(_read_settings_dict(path))


@lru_cache(maxsize=1)
def _load_default_settings() -> AudioSettings:
    path = default_settings_path()
    if not path.exists():
        raise FileNotFoundError(f"缺少音频设置文件：{path}")
    return AudioSettings.model_validate(_read_settings_dict(path))

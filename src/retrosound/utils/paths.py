"""
包内路径定位工具。

定位：
- 运行时需要读取随包发布的 `data/` 目录（例如音频设置 YAML）。
- 只定位本包自身文件；资源归档目录属于外部存储层，不在这里拼真实路径。
"""

from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    return Path(__file__).resolve().parent.parent


def data_dir() -> Path:
    p = package_root() / "data"
    if not p.is_dir():
        raise RuntimeError(f"找不到包内 data 目录：{p}")
    return p


def default_settings_path() -> Path:
    return data_dir() / "audio_settings.yaml"

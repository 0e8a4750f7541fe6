"""
音色定义文件（YAML）：用记谱串批量定义音色库中的 sound。

文件形如：

  sounds:
    - slot: 0
      notes: "c2 e2 g2 c3"
      tones: "p"
      volumes: "7"
      effects: "n"
      speed: 20

约束：
- 结构用 pydantic 严格校验（未知字段、slot 重复都必须失败）。
- 记谱串解析失败时，错误信息必须指出是哪个 slot。
- 应用顺序：先把所有定义解析完再写入音色库；任何一个失败都不修改库。
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.errors import SoundDecodeError
from ..domain.sound import Sound
from .sound_bank import SoundBank


logger = logging.getLogger(__name__)


class SoundDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slot: int = Field(ge=0)
    notes: str = ""
    tones: str = ""
    volumes: str = ""
    effects: str = ""
    speed: int


class SoundDefinitionFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sounds: list[SoundDefinition] = Field(default_factory=list)

    @field_validator("sounds")
    @classmethod
    def _unique_slots(cls, v: list[SoundDefinition]) -> list[SoundDefinition]:
        seen: set[int] = set()
        for d in v:
            if d.slot in seen:
                raise ValueError(f"slot 重复：{d.slot}")
            seen.add(d.slot)
        return v


def load_sound_definitions(path: Path) -> SoundDefinitionFile:
    if not path.exists():
        raise FileNotFoundError(f"缺少音色定义文件：{path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"音色定义文件顶层必须是 dict：{path}")
    return SoundDefinitionFile.model_validate(raw)


def apply_sound_definitions(bank: SoundBank, defs: SoundDefinitionFile) -> None:
    """把定义写入音色库；未出现在定义里的 slot 保持不变。"""

    staged: list[tuple[int, Sound]] = []
    for d in defs.sounds:
        bank.sound(d.slot)  # 校验 slot 范围
        sound = Sound()
        try:
            sound.set(d.notes, d.tones, d.volumes, d.effects, d.speed)
        except SoundDecodeError as e:
            raise ValueError(f"音色定义 slot={d.slot} 解析失败：{e}") from e
        staged.append((d.slot, sound))

    for slot, sound in staged:
        with bank.sound(slot).locked() as target:
            if not target.is_empty():
                logger.warning("sound definition overrides non-empty slot %d", slot)
            target.notes = sound.notes
            target.tones = sound.tones
            target.volumes = sound.volumes
            target.effects = sound.effects
            target.speed = sound.speed
    logger.debug("applied %d sound definitions", len(staged))

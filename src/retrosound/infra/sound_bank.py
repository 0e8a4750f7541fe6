"""
音色库（SoundBank）：按 slot 编号持有多个 SharedSound，并给出确定性的资源名。

约定：
- 资源名 = 归档目录前缀 + "sound" + 两位十进制 slot，例如 slot 3 → `pyxel_resource/sound03`。
  真实落盘（拼接归档路径、写 zip 等）属于外部存储层。
- export_blocks()：只导出非空音色（空块是“未定义”，不写资源）。
- import_blocks()：先把全部文本块解码完，再逐个写入；任何一个块非法都不会修改库。
  未出现在输入里的 slot 会被 clear()。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from ..domain.sound import SharedSound
from ..domain.sound_block import SoundBlock, parse_sound_block
from ..utils.settings import AudioSettings, load_audio_settings


logger = logging.getLogger(__name__)

RESOURCE_SOUND_TOKEN = "sound"


def sound_resource_name(slot: int, *, settings: AudioSettings | None = None) -> str:
    if slot < 0:
        raise ValueError(f"slot 不能为负：{slot}")
    settings = settings or load_audio_settings()
    return f"{settings.resource_archive_dirname}{RESOURCE_SOUND_TOKEN}{slot:02d}"


class SoundBank:
    def __init__(self, num_sounds: int | None = None, *, settings: AudioSettings | None = None) -> None:
        self._settings = settings or load_audio_settings()
        n = self._settings.num_sounds if num_sounds is None else int(num_sounds)
        if not (1 <= n <= 100):
            raise ValueError(f"num_sounds 超界（1..100）：{n}")
        self._sounds = tuple(SharedSound() for _ in range(n))

    def __len__(self) -> int:
        return len(self._sounds)

    def __iter__(self) -> Iterator[SharedSound]:
        return iter(self._sounds)

    def _check_slot(self, slot: int) -> None:
        if not (0 <= slot < len(self._sounds)):
            raise ValueError(f"slot 超界（0..{len(self._sounds) - 1}）：{slot}")

    def sound(self, slot: int) -> SharedSound:
        self._check_slot(slot)
        return self._sounds[slot]

    def resource_name(self, slot: int) -> str:
        self._check_slot(slot)
        return sound_resource_name(slot, settings=self._settings)

    def slot_for_resource_name(self, name: str) -> int:
        prefix = self._settings.resource_archive_dirname + RESOURCE_SOUND_TOKEN
        digits = name[len(prefix) :] if name.startswith(prefix) else ""
        if len(digits) != 2 or not all("0" <= c <= "9" for c in digits):
            raise ValueError(f"不是 sound 资源名：{name!r}")
        slot = int(digits)
        self._check_slot(slot)
        return slot

    def export_blocks(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for slot, shared in enumerate(self._sounds):
            block = shared.serialize()
            if block:
                out[self.resource_name(slot)] = block
        logger.debug("sound bank exported: %d/%d non-empty", len(out), len(self._sounds))
        return out

    def import_blocks(self, blocks: Mapping[str, str]) -> None:
        decoded: dict[int, SoundBlock | None] = {}
        for name, text in blocks.items():
            decoded[self.slot_for_resource_name(name)] = parse_sound_block(text)

        for slot, shared in enumerate(self._sounds):
            with shared.locked() as sound:
                sound.apply_block(decoded.get(slot))
        logger.debug("sound bank imported: %d blocks into %d slots", len(decoded), len(self._sounds))

"""
Sound：一个可播放音色（instrument/sound）的完整定义，以及它的加锁持有者 SharedSound。

定位：
- Sound 是四条通道序列 + speed 的可变记录；通道 setter 会整体替换该通道（从不追加）。
- 四条通道长度互相独立，本模块不做交叉校验；对齐语义由音频引擎决定。
- SharedSound 是多线程共享时的唯一入口：每个操作都在同一把锁内完成，解码失败也会释放锁。

失败语义（正确地失败）：
- 单通道 setter：先解析，成功后才替换；失败时该通道保持原值。
- set()/deserialize()：四条通道全部解析成功后才一次性赋值；任一失败则整个 Sound 不变。
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .notation import parse_effects, parse_notes, parse_tones, parse_volumes
from .sound_block import SoundBlock, dump_sound_block, parse_sound_block
from .types import Effect, Note, Speed, Tone, Volume
from ..utils.settings import load_audio_settings


def initial_speed() -> Speed:
    return load_audio_settings().initial_speed


@dataclass
class Sound:
    notes: list[Note] = field(default_factory=list)
    tones: list[Tone] = field(default_factory=list)
    volumes: list[Volume] = field(default_factory=list)
    effects: list[Effect] = field(default_factory=list)
    speed: Speed = field(default_factory=initial_speed)

    def is_empty(self) -> bool:
        return not self.notes and not self.tones and not self.volumes and not self.effects

    def set(self, note_str: str, tone_str: str, volume_str: str, effect_str: str, speed: Speed) -> None:
        """一次性设置四条通道与 speed；任一通道解析失败时不修改任何字段。"""

        if isinstance(speed, bool) or not isinstance(speed, int):
            raise ValueError(f"speed 必须是 int：{speed!r}")
        notes = parse_notes(note_str)
        tones = parse_tones(tone_str)
        volumes = parse_volumes(volume_str)
        effects = parse_effects(effect_str)

        self.notes = notes
        self.tones = tones
        self.volumes = volumes
        self.effects = effects
        self.speed = speed

    def set_note(self, note_str: str) -> None:
        self.notes = parse_notes(note_str)

    def set_tone(self, tone_str: str) -> None:
        self.tones = parse_tones(tone_str)

    def set_volume(self, volume_str: str) -> None:
        self.volumes = parse_volumes(volume_str)

    def set_effect(self, effect_str: str) -> None:
        self.effects = parse_effects(effect_str)

    def clear(self) -> None:
        """恢复到新建时的状态（四条通道清空，speed 回到初始值）。"""

        self.notes = []
        self.tones = []
        self.volumes = []
        self.effects = []
        self.speed = initial_speed()

    def serialize(self) -> str:
        return dump_sound_block(
            notes=self.notes,
            tones=self.tones,
            volumes=self.volumes,
            effects=self.effects,
            speed=self.speed,
        )

    def deserialize(self, text: str) -> None:
        self.apply_block(parse_sound_block(text))

    def apply_block(self, block: SoundBlock | None) -> None:
        """用已解码的文本块覆盖全部字段；None 表示空块。"""

        if block is None:
            self.clear()
            return
        self.notes = list(block.notes)
        self.tones = list(block.tones)
        self.volumes = list(block.volumes)
        self.effects = list(block.effects)
        self.speed = block.speed


class SharedSound:
    """多线程共享的 Sound 持有者：所有读写都在内部锁内完成，不暴露未加锁的引用。"""

    def __init__(self, sound: Sound | None = None) -> None:
        self._lock = threading.Lock()
        self._sound = sound if sound is not None else Sound()

    @contextmanager
    def locked(self) -> Iterator[Sound]:
        """在一次加锁内做多步读写；不要把 yield 出来的 Sound 带出 with 块。"""

        with self._lock:
            yield self._sound

    def snapshot(self) -> Sound:
        with self._lock:
            return copy.deepcopy(self._sound)

    def set(self, note_str: str, tone_str: str, volume_str: str, effect_str: str, speed: Speed) -> None:
        with self._lock:
            self._sound.set(note_str, tone_str, volume_str, effect_str, speed)

    def set_note(self, note_str: str) -> None:
        with self._lock:
            self._sound.set_note(note_str)

    def set_tone(self, tone_str: str) -> None:
        with self._lock:
            self._sound.set_tone(tone_str)

    def set_volume(self, volume_str: str) -> None:
        with self._lock:
            self._sound.set_volume(volume_str)

    def set_effect(self, effect_str: str) -> None:
        with self._lock:
            self._sound.set_effect(effect_str)

    def clear(self) -> None:
        with self._lock:
            self._sound.clear()

    def is_empty(self) -> bool:
        with self._lock:
            return self._sound.is_empty()

    def serialize(self) -> str:
        with self._lock:
            return self._sound.serialize()

    def deserialize(self, text: str) -> None:
        with self._lock:
            self._sound.deserialize(text)

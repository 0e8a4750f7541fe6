"""
音轨四条通道的基本类型与查表。

定位：
- Note / Volume / Speed 是普通 int；Tone / Effect 是封闭集合，用 IntEnum 表达，
  其整数值就是持久化文本块里的单个数字码。
- 记谱字符 → 值 的映射表集中在这里，解析器与测试共用。
"""

from __future__ import annotations

from enum import IntEnum


Note = int
Volume = int
Speed = int


NOTE_REST: Note = -1
NOTE_REST_CHAR = "r"

# 音名 → 相对 C 的半音偏移
NOTE_LETTER_TO_SEMITONE: dict[str, int] = {
    "c": 0,
    "d": 2,
    "e": 4,
    "f": 5,
    "g": 7,
    "a": 9,
    "b": 11,
}

ACCIDENTAL_TO_OFFSET: dict[str, int] = {
    "#": 1,
    "-": -1,
}

OCTAVE_MIN = 0
OCTAVE_MAX = 4
SEMITONES_PER_OCTAVE = 12

VOLUME_MIN: Volume = 0
VOLUME_MAX: Volume = 7


class Tone(IntEnum):
    TRIANGLE = 0
    SQUARE = 1
    PULSE = 2
    NOISE = 3


class Effect(IntEnum):
    NONE = 0
    SLIDE = 1
    VIBRATO = 2
    FADEOUT = 3


TONE_BY_CHAR: dict[str, Tone] = {
    "t": Tone.TRIANGLE,
    "s": Tone.SQUARE,
    "p": Tone.PULSE,
    "n": Tone.NOISE,
}

EFFECT_BY_CHAR: dict[str, Effect] = {
    "n": Effect.NONE,
    "s": Effect.SLIDE,
    "v": Effect.VIBRATO,
    "f": Effect.FADEOUT,
}

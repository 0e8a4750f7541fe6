"""
四条通道的记谱串解析（note / tone / volume / effect）。

定位：
- 把人手写的紧凑记谱串解析成类型化序列；每个函数都是纯函数，不修改任何 Sound。
- 解析前统一做规范化（去空白、转小写），因此空白可以出现在任意位置。

语法：
- note：`r` 为休止；否则 音名[c d e f g a b] + 可选变音[# -] + 必需八度数字[0-4]
- tone：t/s/p/n 各一字符
- volume：0..7 各一字符
- effect：n/s/v/f 各一字符

约束：
- 任何不认识的字符都必须失败（InvalidTokenError），不跳过、不猜测。
"""

from __future__ import annotations

from .errors import InvalidTokenError
from .types import (
    ACCIDENTAL_TO_OFFSET,
    EFFECT_BY_CHAR,
    NOTE_LETTER_TO_SEMITONE,
    NOTE_REST,
    NOTE_REST_CHAR,
    OCTAVE_MAX,
    OCTAVE_MIN,
    SEMITONES_PER_OCTAVE,
    TONE_BY_CHAR,
    VOLUME_MAX,
    VOLUME_MIN,
    Effect,
    Note,
    Tone,
    Volume,
)
from ..utils.text import simplify_string


def parse_notes(note_str: str) -> list[Note]:
    """解析音高记谱串，例如 `"c0 d#1 r a-0"` → `[0, 15, -1, 8]`。"""

    s = simplify_string(note_str)
    out: list[Note] = []
    i = 0
    while i < len(s):
        c = s[i]
        if c == NOTE_REST_CHAR:
            out.append(NOTE_REST)
            i += 1
            continue

        if c not in NOTE_LETTER_TO_SEMITONE:
            raise InvalidTokenError("note", i, c)
        start = i
        note = NOTE_LETTER_TO_SEMITONE[c]
        i += 1

        if i < len(s) and s[i] in ACCIDENTAL_TO_OFFSET:
            note += ACCIDENTAL_TO_OFFSET[s[i]]
            i += 1

        if i >= len(s):
            raise InvalidTokenError("note", i, "", "缺少八度数字")
        c = s[i]
        if not ("0" <= c <= "9" and OCTAVE_MIN <= int(c) <= OCTAVE_MAX):
            raise InvalidTokenError("note", i, c, f"八度必须是 {OCTAVE_MIN}..{OCTAVE_MAX}")
        note += int(c) * SEMITONES_PER_OCTAVE
        i += 1

        # c-0 会算出 -1，与休止无法区分
        if note < 0:
            raise InvalidTokenError("note", start, s[start], f"音高低于最低音：{s[start:i]!r}")
        out.append(note)
    return out


def parse_tones(tone_str: str) -> list[Tone]:
    s = simplify_string(tone_str)
    out: list[Tone] = []
    for i, c in enumerate(s):
        tone = TONE_BY_CHAR.get(c)
        if tone is None:
            raise InvalidTokenError("tone", i, c)
        out.append(tone)
    return out


def parse_volumes(volume_str: str) -> list[Volume]:
    s = simplify_string(volume_str)
    out: list[Volume] = []
    for i, c in enumerate(s):
        # 只认 ASCII 数字
        if not ("0" <= c <= "9" and VOLUME_MIN <= int(c) <= VOLUME_MAX):
            raise InvalidTokenError("volume", i, c, f"音量必须是 {VOLUME_MIN}..{VOLUME_MAX}")
        out.append(int(c))
    return out


def parse_effects(effect_str: str) -> list[Effect]:
    s = simplify_string(effect_str)
    out: list[Effect] = []
    for i, c in enumerate(s):
        effect = EFFECT_BY_CHAR.get(c)
        if effect is None:
            raise InvalidTokenError("effect", i, c)
        out.append(effect)
    return out

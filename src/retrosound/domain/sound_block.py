"""
Sound 的持久化文本块（block）编解码。

格式（每行以换行结尾，顺序固定）：

  <notes>     每个音两位小写十六进制；休止(-1) 写成 ff；空序列写 none
  <tones>     每个元素一位十进制数字（枚举码）；空序列写 none
  <volumes>   同上
  <effects>   同上
  <speed>     十进制整数

约定：
- 四条序列全空时整个块为空串（“未定义音色”）；此时不写 speed。
- 解码时每行先 strip；空串（或只有空白）解码为“全空”。
- 解码与编码互逆：dump_sound_block(parse_sound_block(x)) == x 对所有 dump 出来的 x 成立。

约束：
- 任何格式问题都必须抛 MalformedBlockError（带行号），不允许截断或跳过。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from .errors import MalformedBlockError
from .types import NOTE_REST, Effect, Note, Speed, Tone, Volume


logger = logging.getLogger(__name__)

EMPTY_MARKER = "none"
NOTE_REST_BYTE = 0xFF

LINE_NOTES = 1
LINE_TONES = 2
LINE_VOLUMES = 3
LINE_EFFECTS = 4
LINE_SPEED = 5

_E = TypeVar("_E", bound=IntEnum)


@dataclass(frozen=True)
class SoundBlock:
    """解码后的文本块内容（与 Sound 字段一一对应）。"""

    notes: tuple[Note, ...]
    tones: tuple[Tone, ...]
    volumes: tuple[Volume, ...]
    effects: tuple[Effect, ...]
    speed: Speed


def dump_notes_line(notes: Sequence[Note]) -> str:
    if not notes:
        return EMPTY_MARKER
    parts: list[str] = []
    for v in notes:
        if v == NOTE_REST:
            v = NOTE_REST_BYTE
        if not (0 <= v <= 0xFF):
            raise ValueError(f"note 超出单字节范围，无法写入文本块：{v}")
        parts.append(f"{v:02x}")
    return "".join(parts)


def dump_digits_line(values: Sequence[int]) -> str:
    if not values:
        return EMPTY_MARKER
    parts: list[str] = []
    for v in values:
        if not (0 <= int(v) <= 9):
            raise ValueError(f"值必须是单个十进制数字，无法写入文本块：{v!r}")
        parts.append(str(int(v)))
    return "".join(parts)


def dump_sound_block(
    *,
    notes: Sequence[Note],
    tones: Sequence[Tone],
    volumes: Sequence[Volume],
    effects: Sequence[Effect],
    speed: Speed,
) -> str:
    if not notes and not tones and not volumes and not effects:
        return ""
    lines = [
        dump_notes_line(notes),
        dump_digits_line(tones),
        dump_digits_line(volumes),
        dump_digits_line(effects),
        str(int(speed)),
    ]
    return "".join(line + "\n" for line in lines)


def parse_notes_line(line: str, *, line_no: int = LINE_NOTES) -> list[Note]:
    line = line.strip()
    if line == EMPTY_MARKER:
        return []
    if len(line) % 2 != 0:
        raise MalformedBlockError(line_no, line, "notes 行长度必须为偶数")
    out: list[Note] = []
    for i in range(0, len(line), 2):
        pair = line[i : i + 2]
        if any(c not in "0123456789abcdefABCDEF" for c in pair):
            raise MalformedBlockError(line_no, line, f"pos={i} 不是十六进制：{pair!r}")
        v = int(pair, 16)
        out.append(NOTE_REST if v == NOTE_REST_BYTE else v)
    return out


def parse_digits_line(line: str, *, line_no: int) -> list[int]:
    line = line.strip()
    if line == EMPTY_MARKER:
        return []
    out: list[int] = []
    for i, c in enumerate(line):
        if not ("0" <= c <= "9"):
            raise MalformedBlockError(line_no, line, f"pos={i} 不是十进制数字：{c!r}")
        out.append(ord(c) - ord("0"))
    return out


def _as_enum_codes(codes: list[int], enum_cls: type[_E], *, line_no: int, line: str) -> list[_E]:
    out: list[_E] = []
    for code in codes:
        try:
            out.append(enum_cls(code))
        except ValueError as e:
            raise MalformedBlockError(line_no, line.strip(), f"未知 {enum_cls.__name__.lower()} 码：{code}") from e
    return out


def parse_speed_line(line: str, *, line_no: int = LINE_SPEED) -> Speed:
    s = line.strip()
    body = s[1:] if s[:1] in ("+", "-") else s
    if not body or any(not ("0" <= c <= "9") for c in body):
        raise MalformedBlockError(line_no, s, "speed 必须是十进制整数")
    return int(s)


def parse_sound_block(text: str) -> SoundBlock | None:
    """解析文本块；空块返回 None（表示“未定义音色”）。"""

    if (text or "").strip() == "":
        return None

    lines = text.splitlines()
    if len(lines) < LINE_SPEED:
        raise MalformedBlockError(len(lines), lines[-1] if lines else "", f"文本块需要 {LINE_SPEED} 行，实际 {len(lines)} 行")
    for extra_no, extra in enumerate(lines[LINE_SPEED:], start=LINE_SPEED + 1):
        if extra.strip() != "":
            raise MalformedBlockError(extra_no, extra, "文本块末尾存在多余内容")

    notes = parse_notes_line(lines[LINE_NOTES - 1])
    tones = _as_enum_codes(
        parse_digits_line(lines[LINE_TONES - 1], line_no=LINE_TONES), Tone, line_no=LINE_TONES, line=lines[LINE_TONES - 1]
    )
    volumes = parse_digits_line(lines[LINE_VOLUMES - 1], line_no=LINE_VOLUMES)
    effects = _as_enum_codes(
        parse_digits_line(lines[LINE_EFFECTS - 1], line_no=LINE_EFFECTS), Effect, line_no=LINE_EFFECTS, line=lines[LINE_EFFECTS - 1]
    )
    speed = parse_speed_line(lines[LINE_SPEED - 1])

    logger.debug(
        "sound block parsed: notes=%d tones=%d volumes=%d effects=%d speed=%d",
        len(notes),
        len(tones),
        len(volumes),
        len(effects),
        speed,
    )
    return SoundBlock(notes=tuple(notes), tones=tuple(tones), volumes=tuple(volumes), effects=tuple(effects), speed=speed)

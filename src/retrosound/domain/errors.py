"""
解码错误类型。

约定：
- 全部继承 ValueError：调用方可以像处理其它“输入不合法”一样统一捕获。
- 错误必须携带定位信息（通道 + 位置，或行号 + 原始行），不允许只给一句笼统的描述。
"""

from __future__ import annotations


class SoundDecodeError(ValueError):
    """记谱串或文本块无法解码。"""


class InvalidTokenError(SoundDecodeError):
    """记谱串中出现不符合该通道语法的字符。

    - position：在规范化（去空白、转小写）之后字符串中的下标
    - char：出错字符；输入提前结束时为空串
    """

    def __init__(self, channel: str, position: int, char: str, reason: str | None = None) -> None:
        self.channel = channel
        self.position = position
        self.char = char
        self.reason = reason
        shown = repr(char) if char else "<end>"
        msg = f"非法 sound {channel}：pos={position} char={shown}"
        if reason:
            msg += f"（{reason}）"
        super().__init__(msg)


class MalformedBlockError(SoundDecodeError):
    """持久化文本块格式错误。line_no 从 1 开始。"""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"sound 文本块第 {line_no} 行非法：{reason}：{line!r}")

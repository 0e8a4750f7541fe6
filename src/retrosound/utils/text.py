"""
记谱串的规范化。
"""

from __future__ import annotations


def simplify_string(text: str) -> str:
    """去掉所有空白并转小写；记谱解析前统一调用。"""

    return "".join((text or "").split()).lower()

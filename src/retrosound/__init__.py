"""
retrosound：复古风格游戏引擎音频子系统的“音轨数据模型”。

定位：
- 保存、解析、（反）序列化短小的 tracker 风格音序：音高（note）、音色（tone）、
  音量（volume）、效果（effect）四条按步对齐的序列，外加一个全局播放速度（speed）。
- 核心是紧凑文本编解码：记谱串（如 `"c0d#1r"`）→ 类型化序列；内存 Sound ↔ 持久化文本块。

边界：
- 不做实时合成、播放调度、混音；这些属于外部音频引擎。
- 不负责把文本块写入资源归档；只给出确定性的资源名。
"""

from .domain.errors import InvalidTokenError, MalformedBlockError, SoundDecodeError
from .domain.sound import SharedSound, Sound
from .domain.types import Effect, Tone
from .infra.sound_bank import SoundBank, sound_resource_name

__all__ = [
    "Effect",
    "InvalidTokenError",
    "MalformedBlockError",
    "SharedSound",
    "Sound",
    "SoundBank",
    "SoundDecodeError",
    "Tone",
    "sound_resource_name",
]

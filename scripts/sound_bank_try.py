"""
音色库端到端演示：记谱串 → Sound → 文本块 → 另一个音色库。

目标：
- 用记谱串定义两个 slot
- 导出为 {资源名: 文本块}
- 导入到新的音色库，确认内容一致

用法：
  python scripts/sound_bank_try.py
"""

from __future__ import annotations

from pathlib import Path
import sys


def _ensure_src_on_path(repo_root: Path) -> None:
    src_dir = repo_root / "src"
    if not src_dir.exists():
        raise RuntimeError(f"找不到 src：{src_dir}")
    sys.path.insert(0, str(src_dir))


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    _ensure_src_on_path(repo_root)

    from retrosound.infra.sound_bank import SoundBank

    bank = SoundBank()
    bank.sound(0).set("e2 e2 c2 g1 r", "p", "7 6 5 4 0", "n n n f n", 25)
    bank.sound(5).set("c3", "n", "7", "f", 10)

    blocks = bank.export_blocks()
    for name, text in blocks.items():
        print(f"[block] {name}")
        print(text, end="")

    restored = SoundBank()
    restored.import_blocks(blocks)
    for slot in (0, 5):
        assert restored.sound(slot).snapshot() == bank.sound(slot).snapshot()

    print(f"[OK] {len(blocks)} sounds round-tripped")


if __name__ == "__main__":
    main()

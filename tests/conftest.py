"""Shared pytest fixtures for retrosound tests."""

from __future__ import annotations

import pytest

from retrosound.domain.sound import SharedSound, Sound
from retrosound.infra.sound_bank import SoundBank
from retrosound.utils.settings import AudioSettings, load_audio_settings


@pytest.fixture
def settings() -> AudioSettings:
    return load_audio_settings()


@pytest.fixture
def sound() -> Sound:
    return Sound()


@pytest.fixture
def shared_sound() -> SharedSound:
    return SharedSound()


@pytest.fixture
def full_sound() -> Sound:
    """A sound with all four channels populated."""
    s = Sound()
    s.set("c0d-0d0d#0", "tspn", "0123", "nsvf", 123)
    return s


@pytest.fixture
def small_bank() -> SoundBank:
    return SoundBank(4)

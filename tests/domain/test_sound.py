"""Tests for Sound and SharedSound."""

import threading

import pytest

from retrosound.domain.errors import InvalidTokenError, MalformedBlockError
from retrosound.domain.sound import SharedSound, Sound
from retrosound.domain.types import Effect, Tone


class TestSoundNew:
    def test_fresh_sound_is_empty(self, sound, settings):
        assert sound.notes == []
        assert sound.tones == []
        assert sound.volumes == []
        assert sound.effects == []
        assert sound.speed == settings.initial_speed
        assert sound.is_empty()

    def test_initial_speed_default(self, sound):
        assert sound.speed == 30


class TestSoundSet:
    def test_set_all_channels(self, sound):
        sound.set("c0d-0d0d#0", "tspn", "0123", "nsvf", 123)
        assert sound.notes == [0, 1, 2, 3]
        assert sound.tones == [Tone.TRIANGLE, Tone.SQUARE, Tone.PULSE, Tone.NOISE]
        assert sound.volumes == [0, 1, 2, 3]
        assert sound.effects == [Effect.NONE, Effect.SLIDE, Effect.VIBRATO, Effect.FADEOUT]
        assert sound.speed == 123

    def test_setter_replaces_not_appends(self, sound):
        sound.set_note("c0 c1")
        sound.set_note("r")
        assert sound.notes == [-1]

    def test_channel_lengths_are_independent(self, sound):
        sound.set("c0 d0 e0", "t", "", "nn", 10)
        assert len(sound.notes) == 3
        assert len(sound.tones) == 1
        assert sound.volumes == []
        assert len(sound.effects) == 2

    def test_failed_channel_setter_keeps_previous(self, sound):
        sound.set_volume("77")
        with pytest.raises(InvalidTokenError):
            sound.set_volume("78")
        assert sound.volumes == [7, 7]

    def test_failed_set_rolls_back_everything(self, full_sound):
        before = (list(full_sound.notes), list(full_sound.tones), list(full_sound.volumes), list(full_sound.effects))
        with pytest.raises(InvalidTokenError) as exc:
            full_sound.set("g4", "p", "8", "n", 5)
        assert exc.value.channel == "volume"
        after = (full_sound.notes, full_sound.tones, full_sound.volumes, full_sound.effects)
        assert after == before
        assert full_sound.speed == 123

    def test_clear_resets_to_fresh_state(self, full_sound):
        full_sound.clear()
        assert full_sound == Sound()


class TestSoundSerialize:
    def test_empty_sound_serializes_to_empty_string(self, sound):
        assert sound.serialize() == ""

    def test_serialize_full(self, full_sound):
        assert full_sound.serialize() == "00010203\n0123\n0123\n0123\n123\n"

    def test_round_trip(self, full_sound):
        restored = Sound()
        restored.deserialize(full_sound.serialize())
        assert restored == full_sound

    def test_round_trip_with_rests(self, sound):
        sound.set("r c0 r b#4", "", "", "vvf", 7)
        restored = Sound()
        restored.deserialize(sound.serialize())
        assert restored == sound

    def test_deserialize_empty_resets(self, full_sound):
        full_sound.deserialize("")
        assert full_sound == Sound()

    def test_deserialize_failure_keeps_state(self, full_sound):
        snapshot = Sound(
            notes=list(full_sound.notes),
            tones=list(full_sound.tones),
            volumes=list(full_sound.volumes),
            effects=list(full_sound.effects),
            speed=full_sound.speed,
        )
        with pytest.raises(MalformedBlockError):
            full_sound.deserialize("ff\n0\n0\n0\nnot-a-number\n")
        assert full_sound == snapshot


class TestSharedSound:
    def test_operations_delegate(self, shared_sound):
        shared_sound.set("c0d-0d0d#0", "tspn", "0123", "nsvf", 123)
        snap = shared_sound.snapshot()
        assert snap.notes == [0, 1, 2, 3]
        assert snap.speed == 123
        assert shared_sound.serialize() == "00010203\n0123\n0123\n0123\n123\n"

    def test_snapshot_is_a_copy(self, shared_sound):
        shared_sound.set_note("c0")
        snap = shared_sound.snapshot()
        snap.notes.append(5)
        assert shared_sound.snapshot().notes == [0]

    def test_lock_released_after_failure(self, shared_sound):
        with pytest.raises(InvalidTokenError):
            shared_sound.set_tone("x")
        # would deadlock if the lock leaked
        shared_sound.set_tone("t")
        with shared_sound.locked() as s:
            assert s.tones == [Tone.TRIANGLE]

    def test_lock_released_after_deserialize_failure(self, shared_sound):
        with pytest.raises(MalformedBlockError):
            shared_sound.deserialize("0\n")
        shared_sound.clear()
        assert shared_sound.is_empty()

    def test_concurrent_setters(self, shared_sound):
        patterns = [("c0 c0", "tt", "00", "nn"), ("r r r", "sss", "777", "fff")]
        errors: list[Exception] = []

        def worker(idx: int) -> None:
            try:
                for _ in range(200):
                    notes, tones, volumes, effects = patterns[idx % 2]
                    shared_sound.set(notes, tones, volumes, effects, idx)
                    snap = shared_sound.snapshot()
                    assert len(snap.notes) == len(snap.tones) == len(snap.volumes) == len(snap.effects)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []


class TestSoundSpeed:
    def test_speed_assigned_verbatim(self, sound):
        sound.set("c0", "t", "7", "n", -5)
        assert sound.speed == -5

    @pytest.mark.parametrize("speed", [2.9, "30", True])
    def test_non_int_speed_rejected(self, full_sound, speed):
        with pytest.raises(ValueError):
            full_sound.set("g4", "p", "7", "n", speed)
        assert full_sound.speed == 123
        assert full_sound.notes == [0, 1, 2, 3]

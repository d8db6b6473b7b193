from collections import Counter

import pytest

from voicepackmerger.errors import InvalidBindingError
from voicepackmerger.models import DEFAULT_BINDING, DEFAULT_SOUND, AchievementBinding, SoundRef
from voicepackmerger.normalization import (
    from_sound_list,
    normalize_achievements,
    normalize_binding,
    to_sound_list,
)

from conftest import multi, single

X = SoundRef("x.wav", "x")
Y = SoundRef("y.wav")


def test_default_binding_has_no_sounds():
    assert to_sound_list(DEFAULT_BINDING) == []


@pytest.mark.parametrize("sentinel", ["default", "Default", "  DEFAULT "])
def test_default_sentinel_is_case_and_whitespace_insensitive(sentinel):
    assert to_sound_list(AchievementBinding(primary=SoundRef(sentinel))) == []


def test_single_sound_binding():
    assert to_sound_list(single("x.wav", "x")) == [X]


def test_extra_sounds_keep_their_order():
    assert to_sound_list(multi("b.wav", "a.wav")) == [SoundRef("b.wav"), SoundRef("a.wav")]


def test_primary_sound_wins_over_extras():
    binding = AchievementBinding(primary=X, extra=(Y,))
    assert to_sound_list(binding) == [X]


def test_missing_binding_is_rejected():
    with pytest.raises(InvalidBindingError):
        to_sound_list(None)


def test_from_empty_list_is_default():
    binding = from_sound_list([])
    assert binding == DEFAULT_BINDING
    assert binding.extra is None


def test_from_one_sound_uses_primary_slot():
    binding = from_sound_list([X])
    assert binding.primary == X
    assert binding.extra is None


def test_from_several_sounds_uses_extra_slot():
    binding = from_sound_list([X, Y])
    assert binding.primary == DEFAULT_SOUND
    assert binding.primary.packaged_path is None
    assert binding.extra == (X, Y)


@pytest.mark.parametrize("sounds", [[X], [X, Y], [Y, X, X]])
def test_round_trip_keeps_sounds(sounds):
    binding = from_sound_list(sounds)
    assert Counter(to_sound_list(binding)) == Counter(sounds)
    assert not (binding.extra and not binding.primary.is_default)


def test_normalize_repairs_single_extra():
    assert normalize_binding(multi("only.wav")) == single("only.wav")


def test_normalize_achievements_returns_new_map():
    achievements = {"A1": multi("only.wav"), "A2": DEFAULT_BINDING}
    normalized = normalize_achievements(achievements)
    assert normalized == {"A1": single("only.wav"), "A2": DEFAULT_BINDING}
    assert achievements["A1"] == multi("only.wav")

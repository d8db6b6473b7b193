import pytest

from voicepackmerger.equivalence import equal_achievement_maps
from voicepackmerger.errors import (
    AchievementKeyNotFoundError,
    InvalidInputError,
    InvalidOperationError,
)
from voicepackmerger.merge_engine import (
    merge_bindings,
    merge_configurations,
    merge_resources,
)
from voicepackmerger.models import DEFAULT_BINDING, SoundRef, VoicepackConfiguration

from conftest import make_pack, multi, single


def test_scenario_defaults_do_not_contribute():
    pack1 = make_pack({"A1": DEFAULT_BINDING, "A2": single("s2.wav")}, keys=["A1", "A2"])
    pack2 = make_pack({"A1": single("s1.wav"), "A2": DEFAULT_BINDING}, keys=["A1", "A2"])

    merged = merge_configurations(pack1, pack2)

    assert merged.achievements["A1"] == single("s1.wav")
    assert merged.achievements["A2"] == single("s2.wav")
    expected = make_pack({"A1": single("s1.wav"), "A2": single("s2.wav")}, keys=["A1", "A2"])
    assert equal_achievement_maps(merged.achievements, expected.achievements)


def test_sounds_are_concatenated_base_first():
    base = make_pack({"A1": single("x.wav")})
    incoming = make_pack({"A1": single("y.wav")})

    merged = merge_configurations(base, incoming).achievements["A1"]

    assert merged.primary.is_default
    assert merged.extra == (SoundRef("x.wav"), SoundRef("y.wav"))


def test_identical_sounds_are_not_deduplicated():
    base = make_pack({"A1": single("x.wav", "x")})
    incoming = make_pack({"A1": single("x.wav", "x")})

    merged = merge_configurations(base, incoming).achievements["A1"]

    assert merged.extra == (SoundRef("x.wav", "x"), SoundRef("x.wav", "x"))


def test_default_on_both_sides_stays_default():
    merged = merge_configurations(make_pack(), make_pack())
    assert all(binding == DEFAULT_BINDING for binding in merged.achievements.values())


def test_multi_sound_lists_are_appended():
    merged = merge_bindings(multi("a.wav", "b.wav"), multi("c.wav"))
    assert [sound.asset_path for sound in merged.extra] == ["a.wav", "b.wav", "c.wav"]


def test_merge_is_deterministic(sample_pack):
    other = make_pack({"A1": single("other.wav"), "A3": multi("c.wav", "d.wav")})

    first = merge_configurations(sample_pack, other)
    second = merge_configurations(sample_pack, other)

    assert equal_achievement_maps(first.achievements, second.achievements)
    assert first.resources == second.resources


def test_merge_does_not_mutate_inputs(sample_pack):
    other = make_pack({"A1": single("other.wav")}, resources={"a1": b"x"}, name="Other")
    base_before = sample_pack.copy()
    other_before = other.copy()

    merged = merge_configurations(sample_pack, other, on_collision=lambda collision: None)

    assert sample_pack == base_before
    assert other == other_before
    assert merged.achievements is not sample_pack.achievements
    assert merged.resources is not sample_pack.resources
    assert merged.metadata is not sample_pack.metadata


def test_result_keeps_base_metadata(sample_pack):
    sample_pack.guid = "1234"
    other = make_pack(name="Other")

    merged = merge_configurations(sample_pack, other)

    assert merged.metadata == sample_pack.metadata
    assert merged.guid == "1234"
    assert merged.source is None


def test_invalid_base_is_rejected(sample_pack):
    with pytest.raises(InvalidOperationError):
        merge_configurations(VoicepackConfiguration(), sample_pack)


@pytest.mark.parametrize("incoming", [None, VoicepackConfiguration()])
def test_invalid_incoming_is_rejected(sample_pack, incoming):
    with pytest.raises(InvalidInputError):
        merge_configurations(sample_pack, incoming)


def test_missing_achievement_in_incoming_is_reported(sample_pack):
    incoming = make_pack(keys=["A1", "A2"])
    with pytest.raises(AchievementKeyNotFoundError) as excinfo:
        merge_configurations(sample_pack, incoming)
    assert excinfo.value.key == "A3"


def test_extra_keys_of_incoming_are_ignored():
    base = make_pack(keys=["A1"])
    incoming = make_pack({"A9": single("z.wav")}, keys=["A1"])
    merged = merge_configurations(base, incoming)
    assert list(merged.achievements) == ["A1"]


def test_resource_collision_overwrites_and_is_reported():
    collisions = []
    merged = merge_resources({"r1": b"aaa"}, {"r1": b"bbbb"}, on_collision=collisions.append)

    assert merged == {"r1": b"bbbb"}
    assert len(collisions) == 1
    assert collisions[0].key == "r1"
    assert (collisions[0].base_size, collisions[0].incoming_size) == (3, 4)


def test_resource_collision_is_logged_without_handler(capsys):
    merge_resources({"r1": b"a"}, {"r1": b"b"})
    assert "[collision]" in capsys.readouterr().out


def test_empty_incoming_resources_keep_base():
    base = {"r1": b"a"}
    merged = merge_resources(base, {})
    assert merged == base
    assert merged is not base


def test_empty_base_resources_take_incoming():
    incoming = {"r1": b"a"}
    assert merge_resources(None, incoming) == incoming
    assert merge_resources({}, incoming) == incoming


def test_distinct_resource_keys_are_united():
    collisions = []
    merged = merge_resources({"r1": b"a"}, {"r2": b"b"}, on_collision=collisions.append)
    assert merged == {"r1": b"a", "r2": b"b"}
    assert collisions == []


def test_missing_resource_stores_stay_missing():
    assert merge_resources(None, None) is None
    assert merge_resources(None, {}) == {}

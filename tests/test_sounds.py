import pytest

from sardip.sounds import PlaySoundEffect, SoundEffect, play_pending_sounds

ASSET_NAMES = [
    "error",
    "poop",
    "poop_scoop",
    "eating",
    "place",
    "victory",
    "defeat",
    "draw",
    "lower",
    "higher",
    "correct",
    "plastic_drop",
]


def _assets():
    return {name: f"asset:{name}" for name in ASSET_NAMES}


def test_every_effect_has_an_asset():
    played = []
    events = [PlaySoundEffect(effect) for effect in SoundEffect]
    play_pending_sounds(events, _assets(), lambda a, v: played.append(a))
    assert sorted(played) == sorted(f"asset:{name}" for name in ASSET_NAMES)


def test_scoop_plays_scoop_asset():
    played = []
    count = play_pending_sounds(
        [PlaySoundEffect(SoundEffect.SCOOP)], _assets(), lambda a, v: played.append((a, v))
    )
    assert count == 1
    assert played == [("asset:poop_scoop", 1.0)]


def test_with_volume_is_used():
    played = []
    event = PlaySoundEffect(SoundEffect.ERROR).with_volume(0.25)
    assert event.volume == 0.25
    play_pending_sounds([event], _assets(), lambda a, v: played.append((a, v)))
    assert played == [("asset:error", 0.25)]


def test_all_effects_play_in_order():
    played = []
    events = [PlaySoundEffect(effect) for effect in SoundEffect]
    count = play_pending_sounds(events, _assets(), lambda a, v: played.append(a))
    assert count == len(events)
    assert played == [f"asset:{effect.value}" for effect in SoundEffect]


def test_no_events_plays_nothing():
    played = []
    assert play_pending_sounds([], _assets(), lambda a, v: played.append(a)) == 0
    assert played == []


def test_missing_asset_raises():
    with pytest.raises(KeyError):
        play_pending_sounds([PlaySoundEffect(SoundEffect.VICTORY)], {}, lambda a, v: None)
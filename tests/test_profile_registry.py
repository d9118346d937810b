# tests/test_profile_registry.py

from dataclasses import FrozenInstanceError

import pytest

from src.config import settings
from src.core import profile_registry
from src.core.miner_models import MinerProfile
from src.core.profile_registry import ProfileRegistry, UnknownProfile, load_registry
from src.data import miners_dev, miners_prod


def _sample_profile(key: str = "test", win_chance: float = 0.01) -> MinerProfile:
    return MinerProfile(
        key=key,
        label=f"TestMiner {key}",
        throughput_th=10.0,
        win_chance=win_chance,
        description="Test hardware",
    )


def test_prod_profiles_have_valid_odds_and_hashrate():
    registry = ProfileRegistry(miners_prod.PROFILES)
    for key, profile in registry.list():
        assert profile.key == key
        assert 0.0 <= profile.win_chance < 1.0
        assert profile.throughput_th > 0


@pytest.mark.parametrize(
    "key, label, throughput_th, win_chance",
    [
        ("s19", "Antminer S19 Pro", 110.0, 0.015),
        ("avalon6", "AvalonMiner 6", 6.0, 0.001),
        ("brains", "Brains MM101", 1.0, 0.0001),
        ("lucky", "LuckyMiner 1 TH/s", 1.0, 0.0001),
        ("pc", "ASUS ROG Strix Gaming", 1.5, 0.0002),
    ],
)
def test_prod_catalogue_values(key, label, throughput_th, win_chance):
    profile = ProfileRegistry(miners_prod.PROFILES).get(key)
    assert profile.label == label
    assert profile.throughput_th == pytest.approx(throughput_th)
    assert profile.win_chance == pytest.approx(win_chance)


def test_list_keeps_registration_order():
    registry = ProfileRegistry(miners_prod.PROFILES)
    assert [key for key, _ in registry.list()] == [
        "s19",
        "avalon6",
        "brains",
        "lucky",
        "pc",
    ]


def test_same_odds_different_blurbs_are_kept_apart():
    registry = ProfileRegistry(miners_prod.PROFILES)
    brains = registry.get("brains")
    lucky = registry.get("lucky")
    assert brains.win_chance == lucky.win_chance
    assert brains.description != lucky.description


def test_unknown_key_raises_unknown_profile():
    registry = ProfileRegistry(miners_prod.PROFILES)
    with pytest.raises(UnknownProfile):
        registry.get("antminer_s99")
    assert issubclass(UnknownProfile, LookupError)
    assert "antminer_s99" not in registry


def test_profiles_are_immutable():
    profile = ProfileRegistry(miners_prod.PROFILES).get("s19")
    with pytest.raises(FrozenInstanceError):
        profile.win_chance = 0.9  # type: ignore[misc]


def test_registry_rejects_mismatched_keys_and_empty_tables():
    with pytest.raises(ValueError):
        ProfileRegistry({"wrong": _sample_profile("test")})
    with pytest.raises(ValueError):
        ProfileRegistry({})


def test_default_falls_back_to_first_entry():
    registry = ProfileRegistry(
        {"a": _sample_profile("a"), "b": _sample_profile("b")}, default_key="zzz"
    )
    assert registry.default_key == "a"
    assert registry.default().key == "a"
    assert len(registry) == 2
    assert list(registry) == ["a", "b"]


def test_load_registry_prod_defaults_to_s19(monkeypatch):
    monkeypatch.setattr(profile_registry, "APP_ENV", "prod")
    registry = load_registry()
    assert registry.default_key == settings.DEFAULT_PROFILE_KEY == "s19"
    assert len(registry) == len(miners_prod.PROFILES)


def test_load_registry_dev_boundary_set(monkeypatch):
    monkeypatch.setattr(profile_registry, "APP_ENV", "dev")
    monkeypatch.setattr(settings, "DEV_PROFILE_SET", "boundary")
    registry = load_registry()
    assert registry.keys() == list(miners_dev.BOUNDARY_PROFILES)
    # s19 is not in the boundary set, so the first entry is preselected
    assert registry.default_key == "never"


def test_dev_catalogue_defaults_to_prod():
    assert miners_dev.get_dev_catalogue("prod") is miners_prod.PROFILES
    assert miners_dev.get_dev_catalogue("") is miners_prod.PROFILES

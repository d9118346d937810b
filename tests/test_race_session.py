# tests/test_race_session.py

import pytest

from src.core.outcome_resolver import Outcome, Winner
from src.core.profile_registry import ProfileRegistry, UnknownProfile
from src.core.race_session import WallClockPump, new_session
from src.core.race_state import Phase, RaceState
from src.core.random_source import RandomSource, ScriptedSource
from src.core.scheduler import VirtualScheduler
from src.core.scoreboard import Scoreboard
from src.data import miners_prod


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _sample_session(draws):
    clock = _FakeClock()
    session = new_session(
        registry=ProfileRegistry(miners_prod.PROFILES, default_key="s19"),
        rng=ScriptedSource(draws),
        animation_rng=RandomSource(1),
        clock=clock,
    )
    return session, clock


def test_pump_feeds_wall_clock_into_scheduler():
    clock = _FakeClock()
    scheduler = VirtualScheduler()
    pump = WallClockPump(scheduler, clock=clock)

    assert pump.pump() == 0.0
    clock.now += 0.25
    assert pump.pump() == pytest.approx(250.0)
    assert scheduler.now_ms() == pytest.approx(250.0)


def test_session_runs_a_race_on_wall_clock():
    session, clock = _sample_session([0.001, 0.5])
    session.start()
    assert session.state.phase is Phase.RACING
    assert session.state.profile.key == "s19"

    clock.now += 1.0
    assert session.tick().phase is Phase.RACING

    clock.now += 2.5
    state = session.tick()
    assert state.phase is Phase.COMPLETE
    assert state.winner is Winner.CHALLENGER
    assert session.scoreboard.challenger_wins == 1


def test_select_ignored_mid_race_and_validated():
    session, clock = _sample_session([0.5, 0.5])
    session.select("pc")
    session.start()
    session.select("avalon6")
    assert session.selected_key == "pc"
    with pytest.raises(UnknownProfile):
        session.select("nope")


def test_reset_through_session():
    session, clock = _sample_session([0.5, 0.5])
    session.start("brains")
    clock.now += 1.0
    session.reset()
    clock.now += 5.0
    state = session.tick()
    assert state.phase is Phase.IDLE
    assert session.scoreboard.races == 0


def test_scoreboard_counts_each_race_once():
    board = Scoreboard()
    s19 = miners_prod.PROFILES["s19"]
    done = RaceState(
        phase=Phase.COMPLETE,
        winner=Winner.PROFILE,
        outcome=Outcome(Winner.PROFILE, s19),
        profile=s19,
        generation=4,
    )

    assert board.record(RaceState(phase=Phase.RACING, generation=4)) is False
    assert board.record(done) is True
    assert board.record(done) is False
    assert board.profile_wins == 1
    assert board.wins_by_profile == {"s19": 1}

    board.clear()
    assert board.races == 0
    assert board.record(done) is False

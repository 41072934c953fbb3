from datetime import datetime, timedelta, timezone

import pytest

from sardip.simulation import (
    MAX_EGG_LIFE,
    SimTime,
    SimulationState,
    run_simulation_schedule,
)

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_default_timestep_is_one_second():
    assert SimTime().timestep == timedelta(seconds=1)


def test_default_state_is_paused():
    assert SimulationState.default() is SimulationState.PAUSED


def test_accumulating_max_egg_life_gives_two_days():
    sim = SimTime(last_run=START)
    sim.accumulate(START + MAX_EGG_LIFE, 1.0)
    assert sim.overstep == timedelta(days=2)


def test_expend_spends_whole_steps():
    sim = SimTime(last_run=START)
    total = timedelta(seconds=3.5)
    sim.accumulate(START + total, 1.0)
    steps = 0
    while sim.expend():
        steps += 1
    assert steps == 3
    assert sim.elapsed + sim.overstep == total
    assert sim.overstep < sim.timestep


def test_accumulate_updates_last_run():
    sim = SimTime(last_run=START)
    later = START + timedelta(seconds=10)
    sim.accumulate(later, 1.0)
    assert sim.last_run == later


def test_zero_scale_accumulates_nothing():
    sim = SimTime(last_run=START)
    sim.accumulate(START + timedelta(seconds=30), 0.0)
    assert sim.overstep == timedelta(0)
    assert sim.expend() is False


def test_scale_multiplies_delta():
    plain = SimTime(last_run=START)
    doubled = SimTime(last_run=START)
    later = START + timedelta(seconds=4)
    plain.accumulate(later, 1.0)
    doubled.accumulate(later, 2.0)
    assert doubled.overstep == plain.overstep * 2


def test_backwards_time_raises():
    sim = SimTime(last_run=START)
    with pytest.raises(ValueError):
        sim.accumulate(START - timedelta(seconds=1), 1.0)


def test_negative_scale_raises():
    sim = SimTime(last_run=START)
    with pytest.raises(ValueError):
        sim.accumulate(START + timedelta(seconds=1), -1.0)


def test_paused_accumulates_without_running():
    sim = SimTime(last_run=START)
    calls = []
    delta = timedelta(seconds=5)
    steps = run_simulation_schedule(
        sim, SimulationState.PAUSED, 1.0, calls.append, now=START + delta
    )
    assert steps == 0
    assert calls == []
    assert sim.overstep == delta


def test_running_calls_update_per_step():
    sim = SimTime(last_run=START)
    calls = []
    steps = run_simulation_schedule(
        sim, SimulationState.RUNNING, 1.0, calls.append, now=START + timedelta(seconds=5)
    )
    assert steps == len(calls)
    assert all(call is sim for call in calls)
    assert sim.elapsed == sim.timestep * steps
    assert sim.overstep < sim.timestep


def test_paused_time_is_spent_when_resumed():
    sim = SimTime(last_run=START)
    run_simulation_schedule(
        sim, SimulationState.PAUSED, 1.0, lambda _: None, now=START + timedelta(seconds=2)
    )
    calls = []
    steps = run_simulation_schedule(
        sim, SimulationState.RUNNING, 1.0, calls.append, now=START + timedelta(seconds=4)
    )
    assert steps == len(calls)
    assert sim.elapsed == timedelta(seconds=4)
import math
import random

import pytest

from commkit.positions import (
    FIELD_SIZE,
    NUM_PLAYERS,
    Position,
    PositionGenerator,
    Vector3,
    current_time_ms,
    main,
)


def make(seed=1, **kwargs):
    return PositionGenerator(rng=random.Random(seed), **kwargs)


def test_defaults_follow_source_constants():
    gen = make()
    assert gen.num_players == NUM_PLAYERS == 10
    assert gen.field_size == FIELD_SIZE == 100
    assert gen.step_size == 2
    assert len(gen.positions) == 10


def test_initial_players_are_on_the_field_with_ids():
    gen = make(seed=7, num_players=25, field_size=50)
    assert [p.sensor_id for p in gen.positions] == list(range(25))
    for p in gen.positions:
        assert 0 <= p.player.x <= 50
        assert 0 <= p.player.y <= 50
        assert p.player.z == 0


def test_same_seed_gives_same_players():
    first = make(seed=3)
    second = make(seed=3)
    other = make(seed=4)
    assert [p.player for p in first.positions] == [p.player for p in second.positions]
    assert [p.player for p in first.positions] != [p.player for p in other.positions]
    moved_first = [p.player for p in first.create_positions()]
    moved_second = [p.player for p in second.create_positions()]
    assert moved_first == moved_second
    assert len(moved_first) == NUM_PLAYERS


def test_steps_are_bounded_and_stay_on_field():
    gen = make(seed=11, num_players=30, field_size=10, step_size=3)
    for _ in range(50):
        before = gen.positions
        after = gen.create_positions()
        assert len(after) == len(before)
        for old, new in zip(before, after):
            assert new.sensor_id == old.sensor_id
            assert 0 <= new.player.x <= 10
            assert 0 <= new.player.y <= 10
            distance = math.hypot(new.player.x - old.player.x, new.player.y - old.player.y)
            assert distance <= 3 + 1e-9


def test_zero_step_keeps_players_in_place():
    gen = make(step_size=0)
    before = [p.player for p in gen.positions]
    after = [p.player for p in gen.create_positions()]
    assert after == before


def test_timestamps_are_current():
    gen = make()
    start = current_time_ms()
    positions = gen.create_positions()
    end = current_time_ms()
    assert all(start <= p.timestamp <= end for p in positions)


def test_returned_list_is_independent_of_state():
    gen = make()
    first = gen.create_positions()
    first.clear()
    assert len(gen.positions) == NUM_PLAYERS


def test_current_time_ms_is_monotone_enough():
    a = current_time_ms()
    b = current_time_ms()
    assert b >= a > 1_600_000_000_000


def test_defaults_of_records():
    assert Position() == Position(0, 0, Vector3(0.0, 0.0, 0.0))


@pytest.mark.parametrize("kwargs", [{"num_players": -1}, {"field_size": 0}, {"step_size": -2}])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        make(**kwargs)


def test_main_prints_one_line_per_round(capsys):
    assert main(["--steps", "3", "--interval", "0", "--players", "4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    for line in lines:
        entries = [e for e in line.split(", ") if e.strip()]
        assert len(entries) == 4
        for entry in entries:
            x, y = map(float, entry.split())
            assert 0 <= x <= 100 and 0 <= y <= 100
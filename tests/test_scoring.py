from termtris.utils import level_for_score, line_clear_score, ticks_per_drop


def test_line_clear_score_values():
    assert line_clear_score(0) == 0
    assert line_clear_score(1) == 225
    assert line_clear_score(2) == 425
    assert line_clear_score(3) == 825
    assert line_clear_score(4) == 1625


def test_speed_increases_with_score():
    assert ticks_per_drop(0) == 20
    assert ticks_per_drop(499) == 20
    assert ticks_per_drop(500) == 19
    assert ticks_per_drop(4999) == 11


def test_speed_never_below_minimum():
    previous = ticks_per_drop(0)
    for score in range(0, 100_000, 250):
        speed = ticks_per_drop(score)
        assert 2 <= speed <= previous
        previous = speed
    assert ticks_per_drop(10**12) == 2


def test_level_display():
    assert level_for_score(0) == 1
    assert level_for_score(500) == 2
    assert level_for_score(1625) == 4

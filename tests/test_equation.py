import random

import pytest

from dice_forge.equation import Equation
from dice_forge.errors import DivideByZero, InvalidToken, OutOfRange


@pytest.mark.parametrize("text", ["3+2*5", "2(1 - 5) ^ 2 + -3 * 2", "7/2", "(4)"])
def test_pure_arithmetic_agrees_across_operations(text):
    equation = Equation(text)
    value = equation.roll()
    assert equation.average() == value
    assert equation.low() == value
    assert equation.high() == value
    assert equation.advantage() == value
    assert equation.disadvantage() == value


def test_ten_d_twenty():
    equation = Equation("10d20")
    assert equation.low() == 10
    assert equation.high() == 200
    assert equation.average() == 105
    assert equation.range() == (10, 200)
    for _ in range(1000):
        assert 10 <= equation.roll() <= 200


def test_one_d_two_hits_both_faces():
    equation = Equation("1d2")
    seen = {equation.roll() for _ in range(200)}
    assert seen == {1, 2}


@pytest.mark.parametrize("text", ["3d6+2", "2d8*3", "1d20+1d4+5", "(2d6)^2"])
def test_low_average_high_are_ordered_for_positive_dice(text):
    equation = Equation(text)
    assert equation.low() <= equation.average() <= equation.high()


def test_subtraction_can_invert_low_and_high():
    equation = Equation("10-1d6")
    assert equation.low() == 9
    assert equation.high() == 4


def test_range_matches_low_and_high():
    equation = Equation("3d5+10/2^2")
    assert equation.range() == (equation.low(), equation.high())
    assert equation.range() == (3 + 2, 15 + 2)


def test_advantage_and_disadvantage_keep_extremes():
    rng = random.Random(99)
    equation = Equation("1d20", rng=rng)
    for _ in range(200):
        assert 1 <= equation.advantage() <= 20
        assert 1 <= equation.disadvantage() <= 20


def test_advantage_and_disadvantage_use_two_independent_rolls():
    replay = random.Random(5)
    a, b = replay.randint(1, 20), replay.randint(1, 20)
    assert Equation("1d20", rng=random.Random(5)).advantage() == max(a, b)
    assert Equation("1d20", rng=random.Random(5)).disadvantage() == min(a, b)


def test_equation_is_reusable():
    equation = Equation("2d6+3")
    program = equation.program
    for _ in range(50):
        equation.roll()
    assert equation.program is program
    assert equation.text == "2d6+3"


def test_repr_shows_postfix():
    assert repr(Equation("3+2*5")) == "Equation('3+2*5', postfix='3 2 5 * +')"


def test_construction_fails_fast_on_invalid_token():
    with pytest.raises(InvalidToken):
        Equation("test")


def test_divide_by_zero_surfaces_on_every_operation():
    equation = Equation("5/(2-2)")
    for operation in (
        equation.roll,
        equation.average,
        equation.low,
        equation.high,
        equation.range,
        equation.advantage,
        equation.disadvantage,
    ):
        with pytest.raises(DivideByZero):
            operation()


def test_exponent_overflow_is_reported_not_computed():
    equation = Equation("2^3000000")
    with pytest.raises(OutOfRange):
        equation.high()
    with pytest.raises(OutOfRange):
        Equation("2^40").roll()

import pytest

from linkagg.seq import Seq


def test_add_wraps_around():
    assert Seq(0xFFFFFFFF) + 1 == Seq.ZERO


def test_minus_one_is_zero_minus_one():
    assert int(Seq(0) - 1) == 0xFFFFFFFF
    assert Seq(0) - 1 == Seq.MINUS_ONE
    assert Seq(0) + -1 == Seq.MINUS_ONE


@pytest.mark.parametrize("start", [0, 12345, 0xFFFFFFF0, 0x7FFFFFFF])
@pytest.mark.parametrize("step", [0, 1, 100, 1000000])
def test_distance_round_trip(start, step):
    a = Seq(start)
    b = a + step
    assert b - a == step
    assert a - b == -step
    assert b - step == a


def test_ordering_across_wrap():
    assert Seq.ZERO > Seq.MINUS_ONE
    assert Seq.MINUS_ONE < Seq.ZERO
    assert Seq.MINUS_ONE.compare(Seq.ZERO) == -1
    assert Seq.ZERO.compare(Seq.MINUS_ONE) == 1


def test_ordering_plain():
    a = Seq(10)
    b = Seq(20)
    assert a < b
    assert b >= a
    assert a.compare(a) == 0
    assert sorted([b, a]) == [a, b]


def test_ordering_consistent_with_successor():
    for value in (0, Seq.USABLE_INTERVAL, 0x80000000, 0xFFFFFFFF):
        s = Seq(value)
        assert s < s + 1
        assert s + 1 > s


def test_int_and_str():
    s = Seq(42)
    assert int(s) == 42
    assert str(s) == "42"


def test_hash_matches_equality():
    assert hash(Seq(5) + 1) == hash(Seq(6))
    assert len({Seq(1), Seq(1), Seq(2)}) == 2


@pytest.mark.parametrize("value", [-1, 1 << 32])
def test_invalid_value(value):
    with pytest.raises(ValueError):
        Seq(value)


def test_offset_out_of_range():
    with pytest.raises(OverflowError):
        Seq(0) - (1 << 32)


def test_immutable():
    s = Seq(1)
    with pytest.raises(AttributeError):
        s._value = 2
    assert int(s) == 1
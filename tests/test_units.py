import pytest

from dbackup.errors import PreconditionViolation
from dbackup.units import UINT64_MAX, GigaByte, KiloByte, MegaByte, checked_add, gb, kb, mb


@pytest.mark.parametrize(
    "func, unit",
    [
        (kb, KiloByte.BINARY),
        (kb, KiloByte.DECIMAL),
        (mb, MegaByte.BINARY),
        (mb, MegaByte.DECIMAL),
        (gb, GigaByte.BINARY),
        (gb, GigaByte.DECIMAL),
    ],
)
def test_unit_bounds(func, unit) -> None:
    assert func(0, unit) == 0
    assert func(UINT64_MAX // unit, unit) == (UINT64_MAX // unit) * unit
    with pytest.raises(PreconditionViolation):
        func(UINT64_MAX, unit)
    with pytest.raises(PreconditionViolation):
        func(-1, unit)


def test_defaults_are_binary() -> None:
    assert kb(1) == 1024
    assert mb(300) == 300 * 1024 * 1024
    assert gb(2) == 2 * 1024**3


def test_checked_add() -> None:
    assert checked_add() == 0
    assert checked_add(1, 2, 3) == 6
    assert checked_add(UINT64_MAX - 1, 1) == UINT64_MAX
    with pytest.raises(PreconditionViolation):
        checked_add(UINT64_MAX, 1)
    with pytest.raises(PreconditionViolation):
        checked_add(5, -1)


def test_precondition_violation_is_not_an_operational_error() -> None:
    from dbackup.errors import BackupError

    assert issubclass(PreconditionViolation, AssertionError)
    assert not issubclass(PreconditionViolation, BackupError)

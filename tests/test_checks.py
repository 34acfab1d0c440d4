from datetime import datetime, timedelta

import pytest

from dbackup.checks import enough_disk_space, existed_for, required_bytes, size_budget
from dbackup.errors import PreconditionViolation
from dbackup.store import LocalFileStore
from dbackup.units import UINT64_MAX, gb, kb, mb


class FixedSpaceStore(LocalFileStore):
    def __init__(self, free: int) -> None:
        self.free = free

    def available_space(self, path):
        return self.free


def test_enough_disk_space_with_default_buffer(tmp_path) -> None:
    assert enough_disk_space(tmp_path, tmp_path), "Free up some disk space and run the test again!"
    assert enough_disk_space(tmp_path, tmp_path, kb(1))
    assert enough_disk_space(tmp_path, tmp_path, mb(1))


def test_huge_buffer_is_not_enough(tmp_path) -> None:
    assert not enough_disk_space(tmp_path, tmp_path, gb(100_000))


@pytest.mark.parametrize("buffer", [-1, UINT64_MAX + 1, 1.5])
def test_invalid_buffer_is_a_precondition_violation(tmp_path, buffer) -> None:
    with pytest.raises(PreconditionViolation):
        enough_disk_space(tmp_path, tmp_path, buffer)


def test_missing_paths_are_precondition_violations(tmp_path) -> None:
    with pytest.raises(PreconditionViolation):
        enough_disk_space(tmp_path / "missing", tmp_path)
    with pytest.raises(PreconditionViolation):
        enough_disk_space(tmp_path, tmp_path / "missing")


def test_required_bytes_counts_files_only(make_tree) -> None:
    root = make_tree({"a": b"12345", "sub/b": b"123", "sub/deeper/c": b"1"})

    assert required_bytes(root, store=LocalFileStore()) == 9


def test_comparison_is_strict(make_tree) -> None:
    root = make_tree({"a": b"1234"})

    assert not enough_disk_space(root, root, 6, store=FixedSpaceStore(10))
    assert enough_disk_space(root, root, 5, store=FixedSpaceStore(10))
    budget = size_budget(root, root, 6, store=FixedSpaceStore(10))
    assert budget.required_bytes == 10
    assert not budget.sufficient


def test_overflowing_requirement_is_a_precondition_violation(make_tree) -> None:
    root = make_tree({"a": b"1"})

    with pytest.raises(PreconditionViolation):
        enough_disk_space(root, root, UINT64_MAX, store=FixedSpaceStore(10))


def test_existed_for(tmp_path) -> None:
    path = tmp_path / "a"
    path.write_bytes(b"\x01")

    assert existed_for(path, timedelta(0))
    assert not existed_for(path, timedelta(seconds=10))
    later = datetime.fromtimestamp(path.stat().st_mtime) + timedelta(seconds=20)
    assert existed_for(path, timedelta(seconds=10), now=later)


def test_existed_for_missing_path_is_false(tmp_path) -> None:
    assert not existed_for(tmp_path / "missing", timedelta(0))


def test_existed_for_rejects_negative_duration(tmp_path) -> None:
    path = tmp_path / "a"
    path.write_bytes(b"\x01")

    with pytest.raises(PreconditionViolation):
        existed_for(path, timedelta(seconds=-100))

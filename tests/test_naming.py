import os
from datetime import date

import pytest

from dbackup.errors import PreconditionViolation
from dbackup.naming import build_path_with_current_date, is_valid_path


def test_appends_date_and_extension(tmp_path) -> None:
    target = tmp_path / "project"

    assert build_path_with_current_date(target, "zip", today=date(2024, 1, 2)) == "project-2024-01-02.zip"
    assert build_path_with_current_date(target, today=date(2024, 1, 2)) == "project-2024-01-02"


def test_relative_paths_resolve_to_real_names() -> None:
    today = date.today().isoformat()
    cwd_name = os.path.basename(os.getcwd())
    parent_name = os.path.basename(os.path.dirname(os.getcwd()))

    assert build_path_with_current_date(".").endswith(today)
    assert build_path_with_current_date(".", "zip").endswith(today + ".zip")
    assert build_path_with_current_date(".") == f"{cwd_name}-{today}"
    assert build_path_with_current_date("./..") == f"{parent_name}-{today}"


def test_dotted_names_keep_their_dots(tmp_path) -> None:
    assert build_path_with_current_date(tmp_path / "my.project", "zip", today=date(2020, 5, 6)) == (
        "my.project-2020-05-06.zip"
    )


def test_stable_within_a_day(tmp_path) -> None:
    first = build_path_with_current_date(tmp_path, "zip")
    second = build_path_with_current_date(tmp_path, "zip")

    assert first == second


@pytest.mark.parametrize("bad", ["", "a\0b", None, 42])
def test_invalid_paths_are_rejected(bad) -> None:
    assert not is_valid_path(bad)
    with pytest.raises(PreconditionViolation):
        build_path_with_current_date(bad, "zip")

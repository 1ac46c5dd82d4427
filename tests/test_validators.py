from argparse import Namespace

import pytest

from curator.validators import (
    ValidationError,
    merge_validators,
    require_file_exists,
    require_file_or_positional,
    require_string_flag,
)


@pytest.fixture
def existing(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("content")
    return str(path)


def test_file_exists_accepts_existing_file(existing):
    check = require_file_exists("input", False)
    namespace = Namespace(input=existing)
    check(namespace)
    assert namespace.input == existing


def test_file_exists_rejects_missing_flag_without_default():
    with pytest.raises(ValidationError, match="was not specified"):
        require_file_exists("input", False)(Namespace(input=""))


def test_file_exists_allows_missing_flag_with_default():
    namespace = Namespace(input="")
    require_file_exists("input", True)(namespace)
    assert namespace.input == ""


def test_file_exists_rejects_missing_file(tmp_path):
    missing = str(tmp_path / "nope")
    with pytest.raises(ValidationError, match="does not exist"):
        require_file_exists("input", True)(Namespace(input=missing))


def test_file_exists_handles_dashed_flag_names(existing):
    with pytest.raises(ValidationError, match="--max-size"):
        require_file_exists("max-size", False)(Namespace())
    require_file_exists("max-size", False)(Namespace(max_size=existing))


def test_string_flag_required():
    with pytest.raises(ValidationError, match="--prefix"):
        require_string_flag("prefix")(Namespace(prefix=None))
    require_string_flag("prefix")(Namespace(prefix="value"))


def test_merge_reports_every_failure():
    check = merge_validators(
        require_string_flag("prefix"),
        require_string_flag("output"),
    )
    with pytest.raises(ValidationError) as info:
        check(Namespace(prefix="", output=""))
    message = str(info.value)
    assert "--prefix" in message
    assert "--output" in message


def test_merge_passes_when_all_pass(existing):
    check = merge_validators(
        require_file_exists("input", False),
        require_string_flag("output"),
    )
    namespace = Namespace(input=existing, output="out")
    check(namespace)
    assert namespace.output == "out"


def test_positional_path_is_stored_on_flag(existing):
    namespace = Namespace(path="", args=[existing])
    require_file_or_positional("path")(namespace)
    assert namespace.path == existing


def test_flag_path_wins_over_positional(existing, tmp_path):
    namespace = Namespace(path=existing, args=[str(tmp_path / "other")])
    require_file_or_positional("path")(namespace)
    assert namespace.path == existing


@pytest.mark.parametrize("positional", [[], ["a", "b"]])
def test_positional_requires_exactly_one(positional):
    with pytest.raises(ValidationError, match="must specify a path"):
        require_file_or_positional("path")(Namespace(path="", args=positional))


def test_positional_path_must_exist(tmp_path):
    missing = str(tmp_path / "missing")
    with pytest.raises(ValidationError, match="does not exist"):
        require_file_or_positional("path")(Namespace(path="", args=[missing]))
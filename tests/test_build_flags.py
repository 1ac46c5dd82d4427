import datetime
import os
import tempfile
from unittest import mock

import pytest

from curator.build_flags import base_download_flags, build_info_flags, repo_flags
from curator.flags import Flag, FlagKind


def _by_name(flags):
    return {flag.name: flag for flag in flags}


def test_repo_flags_names_and_kinds():
    flags = repo_flags()
    names = {flag.name for flag in flags}

    for flag in flags:
        if flag.name in ("dry-run", "verbose", "rebuild"):
            assert flag.kind is FlagKind.BOOL
        elif flag.name == "timeout":
            assert flag.kind is FlagKind.DURATION
        elif flag.name == "retries":
            assert flag.kind is FlagKind.INT
        else:
            assert flag.kind is FlagKind.STRING

    assert len(names) == 7
    assert len(flags) == 7
    assert names == {"config", "distro", "version", "edition", "timeout", "arch", "profile"}


def test_repo_flags_config_default_is_absolute():
    config = _by_name(repo_flags())["config"]
    assert config.default == os.path.abspath("repo_config.yaml")
    assert os.path.isabs(config.default)


def test_repo_flags_timeout_default_is_zero():
    assert _by_name(repo_flags())["timeout"].default == datetime.timedelta(0)


def test_repo_flags_profile_from_environment():
    with mock.patch.dict(os.environ, {"AWS_PROFILE": "deploy"}):
        assert _by_name(repo_flags())["profile"].default == "deploy"


def test_repo_flags_profile_defaults_when_unset():
    env = {k: v for k, v in os.environ.items() if k != "AWS_PROFILE"}
    with mock.patch.dict(os.environ, env, clear=True):
        assert _by_name(repo_flags())["profile"].default == "default"


def test_repo_flags_appends_extra_flags_last():
    extra = Flag("packages", FlagKind.STRING_SLICE, "package filepaths")
    flags = repo_flags(extra)
    assert len(flags) == 8
    assert flags[-1] == extra
    assert flags[0].name == "config"


def test_build_info_flags_order_and_defaults():
    first = Flag("timeout", FlagKind.STRING, "", "no-timeout")
    flags = build_info_flags(first)
    assert [flag.name for flag in flags] == ["timeout", "target", "arch", "edition", "debug"]
    by_name = _by_name(flags)
    assert by_name["edition"].default == "base"
    assert by_name["debug"].kind is FlagKind.BOOL
    assert by_name["debug"].default is False


@pytest.mark.parametrize(
    "system, expected",
    [("Darwin", "osx"), ("Linux", "linux"), ("Windows", "windows")],
)
def test_build_info_flags_target(system, expected):
    with mock.patch("platform.system", return_value=system):
        assert _by_name(build_info_flags())["target"].default == expected


@pytest.mark.parametrize(
    "machine, expected",
    [
        ("x86_64", "x86_64"),
        ("AMD64", "x86_64"),
        ("i686", "i686"),
        ("i386", "i686"),
        ("armv7l", "arm64"),
        ("aarch64", "arm64"),
        ("ppc64le", "ppc64le"),
        ("s390x", "s390x"),
    ],
)
def test_build_info_flags_arch(machine, expected):
    with mock.patch("platform.machine", return_value=machine):
        assert _by_name(build_info_flags())["arch"].default == expected


def test_base_download_flags_single_version():
    flags = base_download_flags(False)
    assert [flag.name for flag in flags] == ["version", "path"]
    assert flags[0].kind is FlagKind.STRING
    assert flags[0].default == ""


def test_base_download_flags_version_slice():
    flags = base_download_flags(True)
    assert flags[0].name == "version"
    assert flags[0].kind is FlagKind.STRING_SLICE
    assert flags[0].default == ()


def test_base_download_flags_path():
    path = _by_name(base_download_flags(False))["path"]
    assert path.env_var == "CURATOR_ARTIFACTS_DIRECTORY"
    assert path.default == os.path.join(tempfile.gettempdir(), "curator-artifact-cache")


def test_base_download_flags_extra_come_first():
    extra = Flag("timeout", FlagKind.STRING, "", "no-timeout")
    flags = base_download_flags(True, extra)
    assert [flag.name for flag in flags] == ["timeout", "version", "path"]


def test_download_flags_combined_with_build_info():
    flags = build_info_flags(*base_download_flags(False))
    assert [flag.name for flag in flags] == [
        "version",
        "path",
        "target",
        "arch",
        "edition",
        "debug",
    ]
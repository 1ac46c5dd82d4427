"""Command-line flags for the repository and artifact download commands."""

from __future__ import annotations

import os
import platform
import tempfile

from curator.flags import Flag, FlagKind

ARTIFACTS_DIRECTORY_ENV = "CURATOR_ARTIFACTS_DIRECTORY"


def repo_flags(*extra: Flag) -> list[Flag]:
    """Flags shared by the repository commands, followed by the given ones."""
    config_path = os.path.abspath("repo_config.yaml")
    profile = os.environ.get("AWS_PROFILE") or "default"

    flags = [
        Flag(
            "config",
            FlagKind.STRING,
            "path of a curator repository configuration file",
            config_path,
        ),
        Flag("distro", FlagKind.STRING, "short name of a distro"),
        Flag("edition", FlagKind.STRING, "build edition"),
        Flag("version", FlagKind.STRING, "a mongodb version"),
        Flag("arch", FlagKind.STRING, "target architecture of package"),
        Flag("profile", FlagKind.STRING, "aws profile", profile),
        Flag(
            "timeout",
            FlagKind.DURATION,
            "specify a timeout for operations. Defaults to unlimited timeout if not specified",
        ),
    ]
    return flags + list(extra)


def _default_target() -> str:
    system = platform.system().lower()
    if system == "darwin":
        return "osx"
    return system


def _default_arch() -> str:
    machine = platform.machine().lower()
    if machine in {"x86_64", "amd64"}:
        return "x86_64"
    if machine in {"i386", "i486", "i586", "i686", "x86"}:
        return "i686"
    if machine == "arm" or (machine.startswith("armv") and not machine.startswith("armv8")):
        return "arm64"
    if machine in {"aarch64", "armv8", "armv8l", "arm64"}:
        return "arm64"
    return machine


def build_info_flags(*flags: Flag) -> list[Flag]:
    """The given flags followed by flags selecting a build's target, arch, edition and debug."""
    return list(flags) + [
        Flag(
            "target",
            FlagKind.STRING,
            "name of target platform or operating system",
            _default_target(),
        ),
        Flag("arch", FlagKind.STRING, "name of target architecture", _default_arch()),
        Flag("edition", FlagKind.STRING, "name of build edition", "base"),
        Flag("debug", FlagKind.BOOL, "specify to download debug symbols"),
    ]


def base_download_flags(version_slice: bool, *flags: Flag) -> list[Flag]:
    """The given flags followed by the version and cache path flags.

    With version_slice the version flag may be given several times.
    """
    if version_slice:
        version = Flag(
            "version",
            FlagKind.STRING_SLICE,
            "specify a version (may specify multiple times)",
        )
    else:
        version = Flag("version", FlagKind.STRING, "specify a version")

    path = Flag(
        "path",
        FlagKind.STRING,
        "path to top level of cache directory",
        os.path.join(tempfile.gettempdir(), "curator-artifact-cache"),
        env_var=ARTIFACTS_DIRECTORY_ENV,
    )
    return list(flags) + [version, path]
"""Command-line flag descriptions shared by the S3 commands."""

from __future__ import annotations

import datetime
import enum
import os
from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_RETRIES = 10


class FlagKind(enum.Enum):
    """The type of value a flag carries."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    DURATION = "duration"
    STRING_SLICE = "string_slice"


_ZERO_VALUES: dict[FlagKind, Any] = {
    FlagKind.STRING: "",
    FlagKind.BOOL: False,
    FlagKind.INT: 0,
    FlagKind.DURATION: datetime.timedelta(0),
    FlagKind.STRING_SLICE: (),
}


@dataclass(frozen=True)
class Flag:
    """A command-line option: its name, kind, default and help text.

    A name may hold aliases separated by ", " (for example "collection, c").
    When no default is given, the zero value of the kind is used.
    """

    name: str
    kind: FlagKind = FlagKind.STRING
    usage: str = ""
    default: Any = None
    env_var: str = ""

    def __post_init__(self) -> None:
        if self.default is None:
            object.__setattr__(self, "default", _ZERO_VALUES[self.kind])
        elif self.kind is FlagKind.STRING_SLICE and isinstance(self.default, list):
            object.__setattr__(self, "default", tuple(self.default))

    @property
    def names(self) -> tuple[str, ...]:
        """The primary name followed by any aliases."""
        return tuple(part.strip() for part in self.name.split(",") if part.strip())


def join_flag_names(*ids: str) -> str:
    """Join a flag name and its aliases into one flag name."""
    return ", ".join(ids)


def base_s3_flags(*extra: Flag) -> list[Flag]:
    """Flags every S3 command takes, followed by the given ones."""
    flags = [
        Flag("region", FlagKind.STRING, "region to send requests to", "us-east-1"),
        Flag("bucket", FlagKind.STRING, "the name of an s3 bucket"),
        Flag(
            "profile",
            FlagKind.STRING,
            "set the AWS profile. By default reads from AWS_PROFILE environment "
            "variable or uses 'default'",
        ),
        Flag("dry-run", FlagKind.BOOL, "make task operate in a dry-run mode"),
        Flag("verbose", FlagKind.BOOL, "run task in verbose (debug) mode"),
        Flag("retries", FlagKind.INT, "number of retry attempts", DEFAULT_MAX_RETRIES),
    ]
    return flags + list(extra)


def s3_sync_flags(*extra: Flag) -> list[Flag]:
    """Flags of the sync commands, followed by the given ones."""
    flags = [
        Flag("local", FlagKind.STRING, "a local path (directory)", os.getcwd()),
        Flag("prefix", FlagKind.STRING, "a prefix of s3 key names"),
        Flag(
            "delete",
            FlagKind.BOOL,
            "delete items from the target that do not exist in the source",
        ),
        Flag(
            "exclude",
            FlagKind.STRING,
            "regular expression used to exclude items from the sync operation",
        ),
        Flag(
            "timeout",
            FlagKind.DURATION,
            "specify a timeout for operations, defaults to unlimited timeout if not specified",
        ),
        Flag("workers", FlagKind.INT, "number of workers for parallelized sync operation", 0),
    ]
    return flags + list(extra)


def s3_sync_to_flags(*extra: Flag) -> list[Flag]:
    """Flags specific to uploading syncs, followed by the given ones."""
    flags = [Flag("permissions", FlagKind.STRING, "canned ACL to apply to the files")]
    return flags + list(extra)


def s3_op_flags(*extra: Flag) -> list[Flag]:
    """Flags of single-object put and get commands, followed by the given ones."""
    flags = [
        Flag("file", FlagKind.STRING, "a local path"),
        Flag("name", FlagKind.STRING, "the remote s3 resource name. may include the prefix."),
    ]
    return flags + list(extra)


def s3_put_flags() -> list[Flag]:
    """Flags specific to uploading a single object."""
    return [
        Flag("type", FlagKind.STRING, "standard MIME type describing the format of the data"),
        Flag(
            "permissions",
            FlagKind.STRING,
            "canned ACL to apply to the file. Allowed values: "
            "'private', 'public-read', 'public-read-write', 'authenticated-read', "
            "'aws-exec-read', 'bucket-owner-read', 'bucket-owner-full-control'",
        ),
    ]


def s3_object_url(bucket: str, key: str) -> str:
    """Return the public URL of an object in a bucket."""
    if "." in bucket:
        base = f"https://s3.amazonaws.com/{bucket}"
    else:
        base = f"https://{bucket}.s3.amazonaws.com"
    return "/".join([base, key])
"""Checks run on parsed command-line options before a command acts.

Each factory returns a callable that takes an argparse namespace and
raises ValidationError when the options are unusable. Positional
arguments are read from the namespace attribute ``args``.
"""

from __future__ import annotations

import argparse
import os
from typing import Callable

Validator = Callable[[argparse.Namespace], None]


class ValidationError(ValueError):
    """Raised when command-line options fail a check."""


def _attr(name: str) -> str:
    return name.replace("-", "_")


def _flag_value(namespace: argparse.Namespace, name: str) -> str:
    value = getattr(namespace, _attr(name), None)
    return value or ""


def require_file_exists(name: str, has_default: bool) -> Validator:
    """Require the flag to name an existing path; empty is allowed if there is a default."""

    def check(namespace: argparse.Namespace) -> None:
        path = _flag_value(namespace, name)
        if not path:
            if not has_default:
                raise ValidationError(f"flag '--{name}' was not specified")
            return
        if not os.path.exists(path):
            raise ValidationError(f"file '{path}' does not exist")

    return check


def require_string_flag(name: str) -> Validator:
    """Require the flag to be set to a non-empty value."""

    def check(namespace: argparse.Namespace) -> None:
        if not _flag_value(namespace, name):
            raise ValidationError(f"flag '--{name}' was not specified")

    return check


def merge_validators(*validators: Validator) -> Validator:
    """Run every validator and report all failures together."""

    def check(namespace: argparse.Namespace) -> None:
        problems = []
        for validator in validators:
            try:
                validator(namespace)
            except ValidationError as err:
                problems.append(str(err))
        if problems:
            raise ValidationError("; ".join(problems))

    return check


def require_file_or_positional(path_flag_name: str) -> Validator:
    """Take the path from the flag or the single positional argument, and require it to exist.

    The resolved path is stored back on the flag's attribute.
    """

    def check(namespace: argparse.Namespace) -> None:
        path = _flag_value(namespace, path_flag_name)
        if not path:
            positional = list(getattr(namespace, "args", None) or [])
            if len(positional) != 1:
                raise ValidationError("must specify a path")
            path = positional[0]

        if not os.path.exists(path):
            raise ValidationError(f"file '{path}' does not exist")

        setattr(namespace, _attr(path_flag_name), path)

    return check
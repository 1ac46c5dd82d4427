"""Repository configuration and repository-building job options."""

from __future__ import annotations

import datetime
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


class ConfigError(ValueError):
    """Raised when a repository configuration cannot be loaded or is invalid."""


class RepoType(str, enum.Enum):
    """Kinds of package repositories."""

    RPM = "rpm"
    DEB = "deb"


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"field '{name}' must be a string, not {type(value).__name__}")


def _as_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ConfigError(f"field '{name}' must be a boolean, not {type(value).__name__}")


def _as_str_list(value: Any, name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"field '{name}' must be a list, not {type(value).__name__}")
    return [_as_str(item, name) for item in value]


def _as_mapping(value: Any, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"field '{name}' must be a mapping, not {type(value).__name__}")
    return value


@dataclass
class RepositoryDefinition:
    """One repository that packages are published to."""

    name: str = ""
    type: str = ""
    code_name: str = ""
    bucket: str = ""
    region: str = ""
    repos: list[str] = field(default_factory=list)
    edition: str = ""
    architectures: list[str] = field(default_factory=list)
    component: str = ""

    @classmethod
    def _from_mapping(cls, data: Any) -> RepositoryDefinition:
        data = _as_mapping(data, "repos")
        return cls(
            name=_as_str(data.get("name"), "name"),
            type=_as_str(data.get("type"), "type"),
            code_name=_as_str(data.get("code_name"), "code_name"),
            bucket=_as_str(data.get("bucket"), "bucket"),
            region=_as_str(data.get("region"), "region"),
            repos=_as_str_list(data.get("repos"), "repos"),
            edition=_as_str(data.get("edition"), "edition"),
            architectures=_as_str_list(data.get("architectures"), "architectures"),
            component=_as_str(data.get("component"), "component"),
        )

    def arch_for_distro(self, arch: str) -> str:
        """Translate an architecture name into the one the distro uses."""
        if self.type == RepoType.DEB:
            if arch == "x86_64":
                return "amd64"
            if arch == "ppc64le":
                return "ppc64el"
        return arch


@dataclass
class RepositoryConfig:
    """Global repository settings and the list of repositories."""

    repos: list[RepositoryDefinition] = field(default_factory=list)
    notary_url: str = ""
    index_template: str = ""
    deb_templates: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    verbose: bool = False
    workspace: str = ""
    temp_space: str = ""
    region: str = ""
    file_name: str = ""
    _definitions: dict[str, dict[str, RepositoryDefinition]] = field(
        default_factory=dict, repr=False, compare=False
    )

    def read(self, file_name: str) -> None:
        """Load settings from a YAML file and apply defaults."""
        self.file_name = file_name
        try:
            with open(file_name, encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as err:
            raise ConfigError(f"reading file '{file_name}': {err}") from err
        except yaml.YAMLError as err:
            raise ConfigError(f"parsing file '{file_name}': {err}") from err

        data = _as_mapping(data, "configuration")

        if "repos" in data:
            repos = data["repos"]
            if repos is None:
                repos = []
            if not isinstance(repos, list):
                raise ConfigError(
                    f"field 'repos' must be a list, not {type(repos).__name__}"
                )
            self.repos = [RepositoryDefinition._from_mapping(item) for item in repos]

        if "services" in data:
            services = _as_mapping(data["services"], "services")
            if "notary_url" in services:
                self.notary_url = _as_str(services["notary_url"], "notary_url")

        if "templates" in data:
            templates = _as_mapping(data["templates"], "templates")
            if "index_page" in templates:
                self.index_template = _as_str(templates["index_page"], "index_page")
            if "deb" in templates:
                deb = _as_mapping(templates["deb"], "deb")
                self.deb_templates = {
                    _as_str(key, "deb"): _as_str(value, "deb") for key, value in deb.items()
                }

        if "dry_run" in data:
            self.dry_run = _as_bool(data["dry_run"], "dry_run")
        if "verbose" in data:
            self.verbose = _as_bool(data["verbose"], "verbose")
        if "workspace" in data:
            self.workspace = _as_str(data["workspace"], "workspace")
        if "temp" in data:
            self.temp_space = _as_str(data["temp"], "temp")
        if "region" in data:
            self.region = _as_str(data["region"], "region")

        self.validate()

    def validate(self) -> None:
        """Fill in defaults for unset settings."""
        if not self.region:
            self.region = DEFAULT_REGION

    def process_repos(self) -> None:
        """Check repository definitions and index them by edition and name."""
        problems: list[str] = []
        valid_types = {RepoType.DEB.value, RepoType.RPM.value}

        for idx, dfn in enumerate(self.repos):
            if dfn.type not in valid_types:
                problems.append(f"'{dfn.type}' is not a valid repo type")

            by_name = self._definitions.setdefault(dfn.edition, {})

            if dfn.name in by_name:
                problems.append(f"'{dfn.edition}.{dfn.name}' already exists as repo #{idx}")
                continue

            if dfn.type == RepoType.DEB and not dfn.architectures:
                problems.append(
                    f"Debian distro '{dfn.name}' does not specify architecture list"
                )
                continue

            if not dfn.region:
                dfn.region = self.region

            by_name[dfn.name] = dfn

        if problems:
            raise ConfigError("; ".join(problems))

    def get_repository_definition(self, name: str, edition: str) -> RepositoryDefinition | None:
        """Return the repository for a name and edition, or None if undefined."""
        return self._definitions.get(edition, {}).get(name)


def get_config(file_name: str) -> RepositoryConfig:
    """Load, validate and index a repository configuration file."""
    config = RepositoryConfig()
    config.read(file_name)
    config.process_repos()

    if not config.notary_url:
        logger.warning(
            "no notary service url specified (file=%s, num_repos=%d)",
            file_name,
            len(config.repos),
        )

    return config


_VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:-(?P<tag>[0-9A-Za-z][0-9A-Za-z.\-]*))?$"
)


@dataclass(frozen=True)
class MongoDBVersion:
    """A parsed server version such as 4.0.3 or 4.2.0-rc1."""

    major: int
    minor: int
    patch: int
    tag: str = ""

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.tag}" if self.tag else base

    @property
    def series(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def is_release_candidate(self) -> bool:
        return self.tag.startswith("rc")

    @property
    def is_development_build(self) -> bool:
        return bool(self.tag) and not self.is_release_candidate


def parse_mongodb_version(version: str) -> MongoDBVersion:
    """Parse a version string, raising ValueError if it is malformed."""
    match = _VERSION_PATTERN.match(version.strip())
    if match is None:
        raise ValueError(f"'{version}' is not a valid version")
    return MongoDBVersion(
        major=int(match["major"]),
        minor=int(match["minor"]),
        patch=int(match["patch"]),
        tag=match["tag"] or "",
    )


@dataclass
class JobOptions:
    """Everything a repository-building job needs to run."""

    configuration: RepositoryConfig | None = None
    distro: RepositoryDefinition | None = None
    version: str = ""
    arch: str = ""
    packages: list[str] = field(default_factory=list)
    job_id: str = ""
    aws_profile: str = ""
    aws_key: str = ""
    aws_secret: str = ""
    aws_token: str = ""
    notary_key: str = ""
    notary_token: str = ""
    release: MongoDBVersion | None = field(default=None, init=False, compare=False)

    def validate(self) -> None:
        """Raise ConfigError listing every logical problem with the options."""
        problems: list[str] = []
        if self.configuration is None:
            problems.append("configuration must not be nil")
        if self.distro is None:
            problems.append("distro specification must not be nil")

        try:
            self.release = parse_mongodb_version(self.version)
        except ValueError as err:
            self.release = None
            problems.append(str(err))

        if problems:
            raise ConfigError("; ".join(problems))
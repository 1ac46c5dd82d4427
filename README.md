# curator

Library pieces for build and release pipelines:

- **Repository configuration** (`curator.repobuilder`): read a YAML file
  that describes package repositories (RPM and DEB), check it, and look up
  a repository definition by distro name and edition. `JobOptions`
  holds the options of a repository-building job and checks them with
  `validate()`; `parse_mongodb_version` parses versions such as `4.2.0`
  or `4.2.0-rc1`.
- **Flag sets** (`curator.flags`, `curator.build_flags`): `Flag`
  descriptions (name, `FlagKind`, default, usage, environment variable)
  for the S3, repository and artifact download options, and
  `s3_object_url` for the public URL of an object in a bucket.
- **Command log capture** (`curator.cmdlogger`): `CommandLogger` runs a
  command or reads a stream and passes each line to a sink, as plain text
  or as parsed JSON, with optional annotations. `get_command` splits a
  shell-quoted command line.
- **Option validators** (`curator.validators`): checks for required flags
  and for files that must exist, run on an `argparse.Namespace`; they
  raise `ValidationError`.
- **Annotations** (`curator.annotations`): `get_annotations` turns
  `key:value` strings into a dict.
- **Cache pruning** (`curator.cache`): `prune_cache` shrinks a directory
  cache to a size limit by removing the least recently modified items
  first.
- **Version information** (`curator.settings`): `version_info()` returns
  the build revision and protocol checksums.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Load a repository configuration and find a definition:

```python
from curator.repobuilder import get_config

config = get_config("repo_config.yaml")
definition = config.get_repository_definition("rhel7", "org")  # None if undefined
```

A configuration that names an unknown repository type, repeats an
edition/name pair, or leaves a DEB repository without architectures is
rejected with `ConfigError`. An unset region defaults to `us-east-1`.

Log the output of a command:

```python
from curator.cmdlogger import CommandLogger, get_command

messages = []
clogger = CommandLogger(sink=lambda level, msg: messages.append(msg),
                        annotations={"stage": "build"})
clogger.run_command(get_command("ls -l"))
```

`run_command` raises `CommandError` when the command cannot start or
exits with a non-zero status.

Prune a cache directory down to 100 MB without deleting anything yet:

```python
from curator.cache import prune_cache

would_remove = prune_cache("/tmp/curator-artifact-cache", 100 * 1024 * 1024, False, True)
```

Files named `full.json` are never removed.

Parse annotations:

```python
from curator.annotations import get_annotations

get_annotations(["team:build", "stage:release"])
# {'team': 'build', 'stage': 'release'}
```

Report version information:

```python
from curator.settings import version_info

print(version_info())
print(version_info().to_json())
```

## What the package does not do

The package is a library only. It installs no command-line program, and
it does not itself talk to S3, submit repository jobs, download builds,
produce reports of check results or create archives: the flag sets
describe those options, but nothing here acts on them.
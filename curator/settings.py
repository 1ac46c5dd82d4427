"""Build-time identifiers and the version report built from them."""

from __future__ import annotations

import json
from dataclasses import dataclass

# Set when a release is built; empty in development checkouts.
BUILD_REVISION = ""
JASPER_CHECKSUM = ""
POPLAR_EVENTS_CHECKSUM = ""
POPLAR_RECORDER_CHECKSUM = ""
CEDAR_METRICS_CHECKSUM = ""


@dataclass(frozen=True)
class VersionInfo:
    """Build revision and protocol checksums of this program."""

    curator: str = ""
    jasper: str = ""
    poplar_events: str = ""
    poplar_recorder: str = ""
    cedar_metrics: str = ""

    def __str__(self) -> str:
        return "".join(
            [
                "Curator Version Info:",
                "\n\t", "Build: ", self.curator,
                "\n\t", "Jasper: ", self.jasper,
                "\n\t", "PoplarEvents: ", self.poplar_events,
                "\n\t", "PoplarRecorder: ", self.poplar_recorder,
                "\n\t", "CedarMetrics: ", self.cedar_metrics,
            ]
        )

    def to_json(self) -> str:
        """Render the version information as indented JSON."""
        document = {
            "curator": self.curator,
            "jasper_proto": self.jasper,
            "poplar_proto_events": self.poplar_events,
            "poplar_proto_recorder": self.poplar_recorder,
            "cedar_metrics_proto": self.cedar_metrics,
        }
        return json.dumps(document, indent=3)


def version_info() -> VersionInfo:
    """Return the version information of the running build."""
    return VersionInfo(
        curator=BUILD_REVISION,
        jasper=JASPER_CHECKSUM,
        poplar_events=POPLAR_EVENTS_CHECKSUM,
        poplar_recorder=POPLAR_RECORDER_CHECKSUM,
        cedar_metrics=CEDAR_METRICS_CHECKSUM,
    )
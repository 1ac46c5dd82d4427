import json

from curator import settings
from curator.settings import VersionInfo, version_info


def _sample():
    return VersionInfo(
        curator="rev1",
        jasper="jas2",
        poplar_events="pev3",
        poplar_recorder="prc4",
        cedar_metrics="cdm5",
    )


def test_version_info_uses_build_constants():
    info = version_info()
    assert info.curator == settings.BUILD_REVISION
    assert info.jasper == settings.JASPER_CHECKSUM
    assert info.poplar_events == settings.POPLAR_EVENTS_CHECKSUM
    assert info.poplar_recorder == settings.POPLAR_RECORDER_CHECKSUM
    assert info.cedar_metrics == settings.CEDAR_METRICS_CHECKSUM


def test_string_form_lists_every_component():
    text = str(_sample())
    lines = text.split("\n\t")
    assert lines[0] == "Curator Version Info:"
    assert lines[1:] == [
        "Build: rev1",
        "Jasper: jas2",
        "PoplarEvents: pev3",
        "PoplarRecorder: prc4",
        "CedarMetrics: cdm5",
    ]


def test_json_round_trip_uses_wire_names():
    document = json.loads(_sample().to_json())
    assert document == {
        "curator": "rev1",
        "jasper_proto": "jas2",
        "poplar_proto_events": "pev3",
        "poplar_proto_recorder": "prc4",
        "cedar_metrics_proto": "cdm5",
    }


def test_json_is_indented_with_three_spaces():
    lines = _sample().to_json().splitlines()
    assert lines[0] == "{"
    assert lines[-1] == "}"
    assert all(line.startswith('   "') for line in lines[1:-1])
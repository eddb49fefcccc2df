"""End-to-end tests for the command line entry point."""

from __future__ import annotations

import importlib
import json

import pytest

from streetview_journey.route import Route
from streetview_journey.route_io import read_svj, write_svj

main_module = importlib.import_module("streetview_journey.main")
main = main_module.main
_resolve_output_path = main_module._resolve_output_path


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "STREETVIEW_API_KEY", "")


def _dense_svj(tmp_path):
    route = Route.from_coordinates([(i * 0.00001, 0.0) for i in range(6)])
    return write_svj(route, tmp_path / "walk.svj")


def test_dense_route_writes_journey(tmp_path) -> None:
    source = _dense_svj(tmp_path)
    journey_json = tmp_path / "journey.json"
    code = main([str(source), "--journey-json", str(journey_json)])
    assert code == 0
    output = tmp_path / "walk_journey.svj"
    assert len(read_svj(output)) == 6
    payload = json.loads(journey_json.read_text(encoding="utf-8"))
    assert len(payload) == 6
    assert set(payload[0]) == {"lat", "lon", "bearing"}


def test_explicit_output_and_trim(tmp_path) -> None:
    source = _dense_svj(tmp_path)
    output = tmp_path / "short.svj"
    assert main([str(source), "--trim-to", "3", "--output", str(output)]) == 0
    assert len(read_svj(output)) == 3


def test_unknown_extension_returns_1(tmp_path) -> None:
    source = tmp_path / "route.kml"
    source.write_text("<kml/>", encoding="utf-8")
    assert main([str(source)]) == 1


def test_missing_file_returns_1(tmp_path) -> None:
    assert main([str(tmp_path / "absent.svj")]) == 1


def test_sparse_route_without_key_returns_2(tmp_path) -> None:
    route = Route.from_coordinates([(0.0, 0.0), (0.0, 0.01)])
    source = write_svj(route, tmp_path / "far.svj")
    assert main([str(source)]) == 2
    assert not (tmp_path / "far_journey.svj").exists()


def test_resolve_output_path(tmp_path) -> None:
    assert _resolve_output_path(tmp_path / "a.gpx", None) == tmp_path / "a.svj"
    assert _resolve_output_path(tmp_path / "a.svj", None) == tmp_path / "a_journey.svj"
    assert _resolve_output_path(tmp_path / "a.gpx", "x.svj").name == "x.svj"


@pytest.mark.parametrize("extra", [["--drop-third-party"], ["--pano-ids", "ids.panoids"]])
def test_panorama_options_without_key_return_2(tmp_path, extra) -> None:
    source = _dense_svj(tmp_path)
    assert main([str(source), *extra]) == 2


def test_pano_id_input_without_key_returns_2(tmp_path) -> None:
    source = tmp_path / "route.panoids"
    source.write_text("CAoSLEFGMVFpcE0\n", encoding="utf-8")
    assert main([str(source)]) == 2

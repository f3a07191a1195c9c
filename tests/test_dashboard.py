"""Tests for the Streamlit dashboard.

The app is driven with Streamlit's ``AppTest`` harness.  Every loader
function is replaced with an offline stand-in so the page renders from
the demo catalog without network access.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from mk8_engine.data_ingestion import sparql_loader
from mk8_engine.data_ingestion.sparql_loader import NamedEntity, SlipperyTrack
from mk8_engine.demo import demo_catalog, demo_slip_modifiers

_APP = str(Path(__file__).resolve().parents[1] / "dashboard" / "app.py")
_NS = "http://mariokart8deluxe.owl#"


def _patch_loaders(monkeypatch: pytest.MonkeyPatch) -> Counter:
    """Replace the loader functions and count how often each is called."""
    calls: Counter = Counter()

    def _stub(name, value):
        def fetch(*args, **kwargs):
            calls[name] += 1
            return value

        monkeypatch.setattr(sparql_loader, name, fetch)

    _stub("fetch_all_components", demo_catalog())
    _stub("fetch_slip_modifiers", demo_slip_modifiers())
    _stub(
        "fetch_slippery_tracks",
        [SlipperyTrack(_NS + "DKJungle", "DK Jungle", "MediumSlip")],
    )
    _stub("fetch_track_slipperiness", "MediumSlip")
    _stub("fetch_cups", [NamedEntity(_NS + "MushroomCup", "Mushroom Cup")])
    _stub("fetch_platforms", [NamedEntity(_NS + "Wii", "Wii")])
    _stub(
        "fetch_tracks_by_slip_class",
        {"LightSlip": [], "MediumSlip": ["DK Jungle"], "HeavySlip": []},
    )
    _stub("fetch_tracks_for_cup", ["Mario Kart Stadium"])
    _stub("fetch_tracks_for_platform", ["Moo Moo Meadows"])
    return calls


def test_track_listings_fetched_once_per_session(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Reruns must reuse the cups, platforms and slip-class listings."""
    calls = _patch_loaders(monkeypatch)
    at = AppTest.from_file(_APP, default_timeout=30)
    at.run()
    at.run()
    at.run()

    assert not at.exception
    assert calls["fetch_all_components"] == 1
    assert calls["fetch_cups"] == 1
    assert calls["fetch_platforms"] == 1
    assert calls["fetch_tracks_by_slip_class"] == 1


def test_calculator_looks_up_track_slipperiness(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The grip value uses the track's slip class, fetched once per track."""
    calls = _patch_loaders(monkeypatch)
    at = AppTest.from_file(_APP, default_timeout=30)
    at.run()

    for category in ("Driver", "Body", "Tire", "Glider"):
        at.selectbox(key=f"calc_{category}").set_value(0)
    track_select = next(
        sb for sb in at.selectbox if sb.label == "Slippery track (optional)"
    )
    track_select.set_value(0)
    at.run()
    at.run()

    assert not at.exception
    assert calls["fetch_track_slipperiness"] == 1
    assert "Grip on Slippery Terrain" in [m.label for m in at.metric]

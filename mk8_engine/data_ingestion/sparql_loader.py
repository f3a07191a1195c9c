"""SPARQL data loader for the MK8 build optimizer.

This module provides functions to:

1. Run fixed query templates against the public Mario Kart 8 Deluxe
   ontology endpoint and return the SPARQL JSON results.
2. Turn result bindings into :class:`Component` objects, slip-class
   modifier tables and plain track/cup/platform listings.
3. Build per-category stat tables as :class:`pandas.DataFrame` objects.

Network access is required for every ``fetch_*`` call.  Nothing is cached
here; callers keep whatever they fetched.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import pandas as pd
import requests

from mk8_engine.config import Settings, load_settings
from mk8_engine.core.component import CATEGORIES, Component, ComponentCatalog
from mk8_engine.core.grip import SLIP_CLASSES

logger = logging.getLogger(__name__)

_ACCEPT_HEADER: str = "application/sparql-results+json"

# Columns hidden from stat tables.
_EXCLUDED_STATS: frozenset[str] = frozenset({"IsDLC"})


class SparqlError(RuntimeError):
    """Raised when the SPARQL endpoint cannot be queried."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class NamedEntity:
    """An ontology individual with a display name (cup, platform, track)."""

    uri: str
    name: str


@dataclass(frozen=True)
class SlipperyTrack:
    """A track with a slippery off-road section.

    Attributes:
        uri: Track URI.
        name: Display name.
        slip_class: Slip class local name (e.g. ``"MediumSlip"``).
    """

    uri: str
    name: str
    slip_class: str


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def fetch_sparql(query: str, settings: Settings | None = None) -> dict[str, Any]:
    """Run *query* against the configured endpoint and return parsed JSON.

    Args:
        query: SPARQL query text.
        settings: Endpoint settings.  Defaults to :func:`load_settings`.

    Returns:
        The decoded ``application/sparql-results+json`` document.

    Raises:
        SparqlError: On transport failure, a non-2xx status, or a body
            that is not valid JSON.
    """
    settings = settings or load_settings()
    try:
        response = requests.get(
            settings.sparql_endpoint,
            params={"query": query, "format": "json"},
            headers={"Accept": _ACCEPT_HEADER},
            timeout=settings.timeout,
        )
    except requests.RequestException as exc:
        logger.error("Error fetching SPARQL data: %s", exc)
        raise SparqlError(f"SPARQL request failed: {exc}") from exc

    if not response.ok:
        message = f"HTTP error! status: {response.status_code} - {response.text[:200]}"
        logger.error("Error fetching SPARQL data: %s", message)
        raise SparqlError(message, status_code=response.status_code)

    try:
        return response.json()
    except ValueError as exc:
        logger.error("Malformed SPARQL response: %s", exc)
        raise SparqlError(f"Malformed SPARQL response: {exc}") from exc


def _bindings(data: dict[str, Any]) -> list[dict[str, Any]]:
    try:
        return list(data["results"]["bindings"])
    except (KeyError, TypeError) as exc:
        raise SparqlError(f"SPARQL response has no result bindings: {exc}") from exc


def _value(binding: dict[str, Any], var: str) -> str | None:
    cell = binding.get(var)
    if cell is None:
        return None
    return cell.get("value")


def local_name(uri: str | None) -> str:
    """Return a readable name for an ontology URI.

    Takes the part after ``#`` (and after the last ``/``), then strips a
    ``has`` property prefix: ``mk:hasGroundSpeed`` -> ``GroundSpeed``.
    """
    if not uri:
        return ""
    name = uri.split("#")[-1]
    if "/" in name:
        name = name.split("/")[-1]
    if name.startswith("has") and len(name) > 3:
        name = name[3:]
        name = name[0].upper() + name[1:]
    return name


def _parse_number(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


# ---------------------------------------------------------------------------
# Query templates
# ---------------------------------------------------------------------------


def _prefixes(settings: Settings) -> str:
    return (
        f"PREFIX mk: <{settings.namespace}>\n"
        "PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>\n"
        "PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>\n"
    )


def _label(var: str, uri_var: str) -> str:
    return (
        f"OPTIONAL {{ ?{uri_var} rdfs:label ?{var}_label . }}\n"
        f"BIND(COALESCE(?{var}_label, STRAFTER(STR(?{uri_var}), STR(mk:))) AS ?{var})"
    )


def _components_query(category: str, settings: Settings) -> str:
    return (
        _prefixes(settings)
        + "SELECT ?entityUri ?entityName ?statProperty ?statValue WHERE {\n"
        f"  ?entityUri rdf:type mk:{category} .\n"
        f"  {_label('entityName', 'entityUri')}\n"
        "  OPTIONAL {\n"
        "    ?entityUri ?statProperty ?statValue .\n"
        "    FILTER (STRSTARTS(STR(?statProperty), STR(mk:has)))\n"
        "    FILTER (?statProperty != mk:isDLC)\n"
        "  }\n"
        "} ORDER BY ?entityName ?statProperty"
    )


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def parse_component_bindings(data: dict[str, Any]) -> list[Component]:
    """Group component rows by entity URI into :class:`Component` objects.

    Rows are expected to carry ``entityUri`` and ``entityName`` and,
    optionally, ``statProperty``/``statValue``.  Entities keep first-seen
    order.  Stat values that do not parse as numbers are dropped.
    """
    names: dict[str, str] = {}
    stats: dict[str, dict[str, float]] = {}

    for binding in _bindings(data):
        uri = _value(binding, "entityUri")
        if uri is None:
            continue
        if uri not in names:
            names[uri] = local_name(_value(binding, "entityName"))
            stats[uri] = {}

        prop = _value(binding, "statProperty")
        if prop is None:
            continue
        raw = _value(binding, "statValue")
        value = _parse_number(raw)
        if value is None:
            logger.warning(
                "Dropping non-numeric stat %s=%r on %s", local_name(prop), raw, uri
            )
            continue
        stats[uri][local_name(prop)] = value

    return [Component(name=names[uri], stats=stats[uri]) for uri in names]


def fetch_components(
    category: str,
    settings: Settings | None = None,
) -> list[Component]:
    """Fetch every component of *category* with its stats.

    Raises:
        ValueError: If *category* is not one of ``CATEGORIES``.
        SparqlError: If the query fails.
    """
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category '{category}', expected one of {CATEGORIES}")
    settings = settings or load_settings()
    data = fetch_sparql(_components_query(category, settings), settings)
    components = parse_component_bindings(data)
    logger.info("Loaded %d %s components", len(components), category)
    return components


def fetch_all_components(settings: Settings | None = None) -> ComponentCatalog:
    """Fetch all four categories in parallel and return a complete catalog.

    The call returns only once every category has been retrieved; the
    first failure is re-raised.
    """
    settings = settings or load_settings()
    with ThreadPoolExecutor(max_workers=len(CATEGORIES)) as pool:
        futures = [
            pool.submit(fetch_components, category, settings)
            for category in CATEGORIES
        ]
        drivers, bodies, tires, gliders = (f.result() for f in futures)

    return ComponentCatalog(
        drivers=tuple(drivers),
        bodies=tuple(bodies),
        tires=tuple(tires),
        gliders=tuple(gliders),
    )


def build_stat_table(components: list[Component]) -> pd.DataFrame:
    """Tabulate *components* with one row each and one column per stat.

    Rows are sorted by name and stat columns alphabetically; ``IsDLC`` is
    left out and missing stats are NaN.
    """
    columns = sorted(
        {
            stat
            for component in components
            for stat in component.stats
            if stat not in _EXCLUDED_STATS
        }
    )
    rows = [
        {"Name": c.name, **{s: c.stats[s] for s in columns if s in c.stats}}
        for c in sorted(components, key=lambda c: c.name)
    ]
    return pd.DataFrame(rows, columns=["Name", *columns])


# ---------------------------------------------------------------------------
# Slipperiness
# ---------------------------------------------------------------------------


def parse_slip_levels(data: dict[str, Any]) -> dict[int, float]:
    """Parse ``hasSlipLevelN`` property rows into ``{N: modifier}``."""
    levels: dict[int, float] = {}
    for binding in _bindings(data):
        prop = _value(binding, "prop")
        if prop is None:
            continue
        suffix = prop.split("#")[-1].replace("hasSlipLevel", "")
        try:
            level = int(suffix)
        except ValueError:
            continue
        value = _parse_number(_value(binding, "value"))
        if value is not None:
            levels[level] = value
    return levels


def fetch_slip_modifiers(
    settings: Settings | None = None,
) -> dict[str, dict[int, float]]:
    """Fetch the traction level modifiers of every slip class.

    A slip class whose query fails is logged and left out of the result.
    """
    settings = settings or load_settings()
    modifiers: dict[str, dict[int, float]] = {}
    for slip_class in SLIP_CLASSES:
        query = (
            _prefixes(settings)
            + "SELECT ?prop ?value WHERE {\n"
            f"  mk:{slip_class} ?prop ?value .\n"
            '  FILTER(CONTAINS(STR(?prop), "hasSlipLevel"))\n'
            "}"
        )
        try:
            modifiers[slip_class] = parse_slip_levels(fetch_sparql(query, settings))
        except SparqlError as exc:
            logger.error("Failed to fetch slip levels for %s: %s", slip_class, exc)
    return modifiers


def fetch_track_slipperiness(
    track_uri: str,
    settings: Settings | None = None,
) -> str | None:
    """Return the slip class local name of *track_uri*, or ``None``."""
    if not track_uri:
        return None
    settings = settings or load_settings()
    query = (
        _prefixes(settings)
        + "SELECT ?slipperinessProfile WHERE {\n"
        f"  <{track_uri}> mk:hasSlipperiness ?slipperinessProfile .\n"
        "}"
    )
    bindings = _bindings(fetch_sparql(query, settings))
    if not bindings:
        return None
    return local_name(_value(bindings[0], "slipperinessProfile")) or None


def fetch_slippery_tracks(settings: Settings | None = None) -> list[SlipperyTrack]:
    """Fetch every track that has a slipperiness profile, sorted by name."""
    settings = settings or load_settings()
    query = (
        _prefixes(settings)
        + "SELECT ?trackUri ?trackName ?slipperinessProfile WHERE {\n"
        "  ?trackUri a mk:Track .\n"
        "  ?trackUri mk:hasSlipperiness ?slipperinessProfile .\n"
        f"  {_label('trackName', 'trackUri')}\n"
        "} ORDER BY ?trackName"
    )
    tracks: list[SlipperyTrack] = []
    for binding in _bindings(fetch_sparql(query, settings)):
        tracks.append(
            SlipperyTrack(
                uri=_value(binding, "trackUri") or "",
                name=local_name(_value(binding, "trackName")),
                slip_class=local_name(_value(binding, "slipperinessProfile")),
            )
        )
    return tracks


def fetch_tracks_by_slip_class(
    settings: Settings | None = None,
) -> dict[str, list[str]]:
    """Group slippery track names by slip class.

    Every class in ``SLIP_CLASSES`` is present in the result, possibly
    with an empty list.
    """
    grouped: dict[str, list[str]] = {slip_class: [] for slip_class in SLIP_CLASSES}
    for track in fetch_slippery_tracks(settings):
        grouped.setdefault(track.slip_class, []).append(track.name)
    return grouped


# ---------------------------------------------------------------------------
# Cups, platforms and tracks
# ---------------------------------------------------------------------------


def _fetch_named(rdf_type: str, settings: Settings) -> list[NamedEntity]:
    query = (
        _prefixes(settings)
        + "SELECT DISTINCT ?uri ?name WHERE {\n"
        f"  ?uri rdf:type mk:{rdf_type} .\n"
        f"  {_label('name', 'uri')}\n"
        "} ORDER BY ?name"
    )
    return [
        NamedEntity(uri=_value(b, "uri") or "", name=local_name(_value(b, "name")))
        for b in _bindings(fetch_sparql(query, settings))
    ]


def _fetch_track_names(pattern: str, settings: Settings) -> list[str]:
    query = (
        _prefixes(settings)
        + "SELECT ?trackName WHERE {\n"
        f"  {pattern}\n"
        f"  {_label('trackName', 'track')}\n"
        "} ORDER BY ?trackName"
    )
    return [
        local_name(_value(b, "trackName"))
        for b in _bindings(fetch_sparql(query, settings))
    ]


def fetch_cups(settings: Settings | None = None) -> list[NamedEntity]:
    """Fetch all cups, sorted by name."""
    return _fetch_named("Cup", settings or load_settings())


def fetch_platforms(settings: Settings | None = None) -> list[NamedEntity]:
    """Fetch all game platforms, sorted by name."""
    return _fetch_named("GamePlatform", settings or load_settings())


def fetch_tracks_for_cup(cup_uri: str, settings: Settings | None = None) -> list[str]:
    """Fetch the names of the tracks in the cup *cup_uri*."""
    return _fetch_track_names(
        f"<{cup_uri}> mk:hasTrack ?track .", settings or load_settings()
    )


def fetch_tracks_for_platform(
    platform_uri: str,
    settings: Settings | None = None,
) -> list[str]:
    """Fetch the names of the tracks that originate from *platform_uri*."""
    return _fetch_track_names(
        f"?track mk:hasOriginPlatform <{platform_uri}> .",
        settings or load_settings(),
    )

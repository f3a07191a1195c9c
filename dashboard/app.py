"""MK8 Build Optimizer Dashboard.

Interactive dashboard built with Streamlit and Plotly.
Provides playstyle build recommendations, a single-stat parameter
filter, a combined stat calculator with grip on slippery terrain,
per-category stat tables, and cup/platform track listings.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from mk8_engine.config import load_playstyles
from mk8_engine.core.component import (
    CATEGORIES,
    STAT_BAR_MAX,
    STAT_NAMES,
    Component,
    ComponentCatalog,
    stat_bar_percentages,
)
from mk8_engine.core.grip import grip_on_slippery_terrain, slip_class_label
from mk8_engine.core.optimizer import combine_stats, find_best_combination
from mk8_engine.data_ingestion.sparql_loader import (
    SparqlError,
    build_stat_table,
    fetch_all_components,
    fetch_cups,
    fetch_platforms,
    fetch_slip_modifiers,
    fetch_slippery_tracks,
    fetch_track_slipperiness,
    fetch_tracks_by_slip_class,
    fetch_tracks_for_cup,
    fetch_tracks_for_platform,
)
from mk8_engine.logging_config import setup_logging

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _stat_chart(stats: dict[str, float], title: str) -> go.Figure:
    """Horizontal bar chart of the known stats, scaled to ``STAT_BAR_MAX``."""
    values = [stats.get(name, 0.0) for name in STAT_NAMES]
    widths = stat_bar_percentages(stats)
    fig = go.Figure(
        go.Bar(
            x=[widths[name] for name in STAT_NAMES],
            y=list(STAT_NAMES),
            orientation="h",
            marker_color="#e60012",
            text=[f"{v:.2f}" for v in values],
            textposition="outside",
        )
    )
    fig.update_layout(
        title=title,
        xaxis=dict(range=[0, 100], title=f"% of {STAT_BAR_MAX:g}"),
        yaxis=dict(autorange="reversed"),
        height=460,
        margin=dict(l=160),
    )
    return fig


def _show_build(names: dict[str, str]) -> None:
    cols = st.columns(len(names))
    for col, (category, name) in zip(cols, names.items()):
        col.metric(category, name or "--")


def _load_catalog() -> ComponentCatalog | None:
    """Fetch components once per session; ``None`` after a failed load."""
    if "catalog" not in st.session_state:
        with st.spinner("Loading all component data... This may take a moment."):
            try:
                st.session_state["catalog"] = fetch_all_components()
            except SparqlError as exc:
                st.error(f"Failed to load component data: {exc}")
                return None
    return st.session_state["catalog"]


def _load_slip_data() -> tuple[dict[str, dict[int, float]], list]:
    if "slip_modifiers" not in st.session_state:
        with st.spinner("Loading slippery track data..."):
            st.session_state["slip_modifiers"] = fetch_slip_modifiers()
            try:
                st.session_state["slippery_tracks"] = fetch_slippery_tracks()
            except SparqlError as exc:
                st.error(f"Failed to load tracks for calculator: {exc}")
                st.session_state["slippery_tracks"] = []
    return st.session_state["slip_modifiers"], st.session_state["slippery_tracks"]


def _load_track_listings() -> dict | None:
    """Fetch cups, platforms and slip-class groups once per session."""
    if "track_listings" not in st.session_state:
        with st.spinner("Loading cups and platforms..."):
            try:
                st.session_state["track_listings"] = {
                    "cups": fetch_cups(),
                    "platforms": fetch_platforms(),
                    "by_slip_class": fetch_tracks_by_slip_class(),
                }
            except SparqlError as exc:
                st.error(f"Failed to load tracks: {exc}")
                return None
    return st.session_state["track_listings"]


def _cached_lookup(store: str, key: str, fetch):
    """Memoise ``fetch(key)`` in ``st.session_state[store]``."""
    cache = st.session_state.setdefault(store, {})
    if key not in cache:
        cache[key] = fetch(key)
    return cache[key]


def _select_component(
    category: str,
    components: tuple[Component, ...],
    col,
) -> Component | None:
    options = list(range(len(components)))
    index = col.selectbox(
        category,
        options=[None, *options],
        format_func=lambda i: (
            f"Select a {category}" if i is None else components[i].name
        ),
        key=f"calc_{category}",
    )
    return None if index is None else components[index]


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:  # noqa: C901
    """Entry point for the Streamlit dashboard."""
    setup_logging()
    st.set_page_config(page_title="MK8 Build Optimizer", layout="wide")
    st.title("MK8 Build Optimizer")

    playstyles = load_playstyles()

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Build Search")
    playstyle_key: str | None = st.sidebar.selectbox(
        "Playstyle",
        options=[None, *playstyles],
        format_func=lambda k: (
            "Select a Playstyle" if k is None else playstyles[k].display_name
        ),
    )
    selected_stat: str | None = st.sidebar.selectbox(
        "Stat to maximise",
        options=[None, *STAT_NAMES],
        format_func=lambda s: "Select a Stat" if s is None else s,
    )
    st.sidebar.markdown("---")
    if st.sidebar.button("Reload data"):
        for key in (
            "catalog",
            "slip_modifiers",
            "slippery_tracks",
            "track_slip_class",
            "track_listings",
            "cup_tracks",
            "platform_tracks",
        ):
            st.session_state.pop(key, None)

    catalog = _load_catalog()
    if catalog is None:
        return

    # ── Section 1: Playstyle recommendation ──────────────────────────────
    st.header("1 -- Playstyle Recommendation")

    if playstyle_key is None:
        st.info("Select a playstyle in the sidebar.")
    else:
        style = playstyles[playstyle_key]
        st.write(style.description)
        best = find_best_combination(
            catalog.drivers,
            catalog.bodies,
            catalog.tires,
            catalog.gliders,
            style.weights,
        )
        if best is None:
            st.error("Could not determine a best build.")
        else:
            st.success(f'Recommended build for "{style.display_name}" found!')
            _show_build(best.names)
            st.plotly_chart(
                _stat_chart(dict(best.stats), "Build Stats"),
                use_container_width=True,
            )

    # ── Section 2: Parameter filter ──────────────────────────────────────
    st.header("2 -- Parameter Filter")

    if selected_stat is None:
        st.info("Please select a stat.")
    else:
        best = find_best_combination(
            catalog.drivers,
            catalog.bodies,
            catalog.tires,
            catalog.gliders,
            selected_stat,
        )
        if best is None:
            st.warning("No combinations found for the selected stat.")
        else:
            _show_build(best.names)
            st.metric(selected_stat, f"{best.score:.2f}")

    # ── Section 3: Stat calculator ───────────────────────────────────────
    st.header("3 -- Stat Calculator")

    slip_modifiers, slippery_tracks = _load_slip_data()
    cols = st.columns(len(CATEGORIES) + 1)
    chosen = [
        _select_component(category, catalog.for_category(category), col)
        for category, col in zip(CATEGORIES, cols)
    ]
    track_index = cols[-1].selectbox(
        "Slippery track (optional)",
        options=[None, *range(len(slippery_tracks))],
        format_func=lambda i: (
            "Select a Slippery Track"
            if i is None
            else f"{slippery_tracks[i].name} "
            f"({slip_class_label(slippery_tracks[i].slip_class)})"
        ),
    )

    if any(c is None for c in chosen):
        st.info("Please select components (track is optional).")
    else:
        totals = combine_stats(*chosen)
        st.plotly_chart(
            _stat_chart(totals, "Combined Stats"),
            use_container_width=True,
        )
        if track_index is not None:
            track = slippery_tracks[track_index]
            try:
                slip_class = _cached_lookup(
                    "track_slip_class", track.uri, fetch_track_slipperiness
                )
            except SparqlError as exc:
                st.error(f"Failed to load track slipperiness: {exc}")
                slip_class = None
            modifiers = slip_modifiers.get(slip_class) if slip_class else None
            grip = (
                None
                if modifiers is None
                else grip_on_slippery_terrain(totals, modifiers)
            )
            if grip is not None:
                st.metric("Grip on Slippery Terrain", f"{grip:.3f}")

    # ── Section 4: Stat tables ───────────────────────────────────────────
    st.header("4 -- Component Stats")

    for tab, category in zip(st.tabs(list(CATEGORIES)), CATEGORIES):
        with tab:
            table = build_stat_table(list(catalog.for_category(category)))
            if table.empty:
                st.write("No stats found.")
            else:
                st.dataframe(table, hide_index=True, use_container_width=True)

    # ── Section 5: Cups, platforms and slippery tracks ───────────────────
    st.header("5 -- Cups & Tracks")

    listings = _load_track_listings()
    if listings is not None:
        col_cup, col_platform = st.columns(2)
        try:
            with col_cup:
                cup = st.selectbox(
                    "Cup",
                    options=[None, *listings["cups"]],
                    format_func=lambda c: "Select a Cup" if c is None else c.name,
                )
                if cup is not None:
                    tracks = _cached_lookup(
                        "cup_tracks", cup.uri, fetch_tracks_for_cup
                    )
                    st.markdown(
                        "\n".join(f"- {t}" for t in tracks)
                        or "No tracks found for this cup."
                    )

            with col_platform:
                platform = st.selectbox(
                    "Platform",
                    options=[None, *listings["platforms"]],
                    format_func=lambda p: (
                        "Select a Platform" if p is None else p.name
                    ),
                )
                if platform is not None:
                    tracks = _cached_lookup(
                        "platform_tracks", platform.uri, fetch_tracks_for_platform
                    )
                    st.markdown(
                        "\n".join(f"- {t}" for t in tracks)
                        or "No tracks found for this platform."
                    )
        except SparqlError as exc:
            st.error(f"Failed to load tracks: {exc}")

        st.subheader("Slippery Terrain")
        st.dataframe(
            pd.DataFrame(
                {
                    slip_class_label(k): pd.Series(v, dtype=object)
                    for k, v in listings["by_slip_class"].items()
                }
            ).fillna(""),
            hide_index=True,
            use_container_width=True,
        )
        st.caption(
            "Slippery terrains are off-road sections where grip is reduced. "
            "Light, Medium or Heavy sets how much a build's Off-Road Traction "
            "is penalized."
        )

    # ── Footer ───────────────────────────────────────────────────────────
    st.markdown("---")
    st.caption("MK8 Build Optimizer -- data from the MK8 Deluxe ontology.")


if __name__ == "__main__":
    main()

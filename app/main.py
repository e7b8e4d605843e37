"""
Data Science Salaries Dashboard - Streamlit Application

Hosts the three coordinated views. Every widget interaction is routed
through the CrossFilterEngine kept in the session; the views only draw
the update the engine publishes.
"""

from pathlib import Path
from typing import Dict, Tuple
import sys

import pandas as pd
import streamlit as st

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_config import setup_logging
from config.settings import Config
from core.engine import CrossFilterEngine
from core.records import (
    DIMENSION_NAMES,
    EXPERIENCE_LEVEL_NAMES,
    EXPERIENCE_LEVELS,
    NUMERIC_DIMENSIONS,
    RecordStore,
)
from core.views import BarViewAdapter, DistributionViewAdapter, LineViewAdapter, ViewAdapter
from datasource.loader import load_dataset


config = Config.load()

# ------------------------------------------------------------------
# Page configuration
# ------------------------------------------------------------------
st.set_page_config(
    page_title=config.app.title,
    page_icon=config.app.page_icon,
    layout=config.app.layout,
    initial_sidebar_state="expanded",
)
setup_logging(config.app.log_level, log_dir=config.logs_dir, file_logging=config.app.log_to_file)

ENGINE_KEY = "crossfilter_engine"
VIEWS_KEY = "crossfilter_views"
DATASET_NAME_KEY = "dataset_name"

SLIDER_STEPS = {"work_year": 1, "salary_in_usd": 1000.0, "remote_ratio": 5.0}


# ------------------------------------------------------------------
# Cached helpers
# ------------------------------------------------------------------
@st.cache_data(show_spinner=False)
def cached_dataset() -> Tuple[pd.DataFrame, str]:
    return load_dataset(config.app)


def get_dashboard() -> Tuple[CrossFilterEngine, Dict[str, ViewAdapter]]:
    """One engine and one set of view adapters per browser session."""
    if ENGINE_KEY not in st.session_state:
        df, name = cached_dataset()
        engine = CrossFilterEngine(RecordStore(df), line_view_height=config.app.line_view_height)
        st.session_state[ENGINE_KEY] = engine
        st.session_state[VIEWS_KEY] = {
            "distribution": DistributionViewAdapter(engine, config.transitions).attach(),
            "bars": BarViewAdapter(engine, config.transitions).attach(),
            "lines": LineViewAdapter(engine, config.transitions).attach(),
        }
        st.session_state[DATASET_NAME_KEY] = name
    return st.session_state[ENGINE_KEY], st.session_state[VIEWS_KEY]


def slider_bounds(engine: CrossFilterEngine, dimension: str):
    values = engine.store.column(dimension)
    if dimension == "work_year":
        return int(values.min()), int(values.max())
    return float(values.min()), float(values.max())


def slider_key(dimension: str) -> str:
    return f"range_{dimension}"


# ------------------------------------------------------------------
# Widget callbacks
# ------------------------------------------------------------------
def on_slider_change(dimension: str) -> None:
    engine, _ = get_dashboard()
    low, high = st.session_state[slider_key(dimension)]
    if (low, high) == slider_bounds(engine, dimension):
        engine.on_range_change(dimension, None)
    else:
        engine.on_range_change(dimension, (low, high))


def on_reset() -> None:
    engine, _ = get_dashboard()
    for dimension in NUMERIC_DIMENSIONS:
        st.session_state[slider_key(dimension)] = slider_bounds(engine, dimension)
    engine.reset()


# ------------------------------------------------------------------
# Layout
# ------------------------------------------------------------------
def render_sidebar(engine: CrossFilterEngine) -> None:
    st.sidebar.header("Brushes")
    st.sidebar.caption("Drag a range to filter the records behind the bar chart.")

    for dimension in NUMERIC_DIMENSIONS:
        low, high = slider_bounds(engine, dimension)
        if low == high:
            st.sidebar.caption(f"{DIMENSION_NAMES[dimension]}: {low} (single value)")
            continue
        st.session_state.setdefault(slider_key(dimension), (low, high))
        st.sidebar.slider(
            DIMENSION_NAMES[dimension],
            min_value=low,
            max_value=high,
            step=SLIDER_STEPS[dimension],
            key=slider_key(dimension),
            on_change=on_slider_change,
            args=(dimension,),
        )

    st.sidebar.button("Reset filters", on_click=on_reset, use_container_width=True)


def render_category_toggles(engine: CrossFilterEngine) -> None:
    st.caption("Click a level to highlight it; click again to clear.")
    columns = st.columns(len(EXPERIENCE_LEVELS))
    for column, level in zip(columns, EXPERIENCE_LEVELS):
        column.button(
            EXPERIENCE_LEVEL_NAMES[level],
            key=f"category_{level}",
            on_click=engine.on_category_click,
            args=(level,),
            type="primary" if engine.selected_category == level else "secondary",
            use_container_width=True,
        )


def main() -> None:
    engine, views = get_dashboard()
    update = engine.update

    st.title(config.app.title)
    st.caption(
        f"{st.session_state[DATASET_NAME_KEY]} • "
        f"{update.member_count:,} of {update.total_count:,} records inside the brushes • "
        f"{update.emphasized_count:,} highlighted"
    )

    render_sidebar(engine)

    left, right = st.columns([0.46, 0.54])
    with left:
        st.plotly_chart(views["distribution"].figure, use_container_width=True)
        st.plotly_chart(views["lines"].figure, use_container_width=True)
    with right:
        st.plotly_chart(views["bars"].figure, use_container_width=True)
        render_category_toggles(engine)


main()

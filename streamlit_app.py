"""Streamlit Web UI for cv-renderer.

Preview the CV page in any format and download the three PDF documents.
"""

from __future__ import annotations

import logging

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()

from cv_renderer.cache.record_cache import RecordCache
from cv_renderer.config import load_config
from cv_renderer.export.generator import default_full_version_url, render_document
from cv_renderer.export.html_page import render_html_page
from cv_renderer.export.profiles import PROFILES
from cv_renderer.parsers.cv_loader import DataUnavailableError, load_cv

logger = logging.getLogger(__name__)

config = load_config()

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="CV Renderer",
    page_icon=":page_facing_up:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("CV Renderer")
    st.caption("CV page preview and PDF downloads")

    source = st.text_input("Data source (path or URL)", value=config.data.source)
    fmt = st.radio(
        "Format",
        list(PROFILES),
        format_func=lambda name: f"{PROFILES[name].label} - {PROFILES[name].description}",
        index=0,
    )
    reload_clicked = st.button("Reload data")

# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

if reload_clicked or st.session_state.get("source") != source:
    cache = RecordCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    try:
        st.session_state.cv = load_cv(source, cache=cache, timeout=config.data.timeout)
        st.session_state.source = source
    except DataUnavailableError as e:
        logger.warning("CV data unavailable: %s", e)
        st.session_state.pop("cv", None)
        st.error(str(e))
        st.stop()

cv = st.session_state.get("cv")
if cv is None:
    st.stop()

# ---------------------------------------------------------------------------
# Downloads
# ---------------------------------------------------------------------------

full_url = config.export.full_version_url or default_full_version_url(cv)
dl_cols = st.columns(len(PROFILES))
for col, name in zip(dl_cols, PROFILES):
    with col:
        with st.spinner(f"Rendering {name}..."):
            result = render_document(
                cv,
                name,
                full_version_url=full_url,
                repair_spacing=config.export.repair_split_text,
            )
        st.download_button(
            label=f"{result.profile.label} PDF ({result.page_count} p.)",
            data=result.pdf,
            file_name=result.filename,
            mime="application/pdf",
            type="primary" if name == fmt else "secondary",
        )

# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

components.html(render_html_page(cv, fmt), height=1200, scrolling=True)

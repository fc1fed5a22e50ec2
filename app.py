# app.py
from __future__ import annotations
import logging
import streamlit as st
from core.settings import load_settings, Settings
from core.db import get_engine, init_db

from screens.subject_assignment import render as render_subject_assignment
from screens.catalog import render as render_catalog

log = logging.getLogger(__name__)


def _configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=settings.logging.format,
    )

# This function's only job is to create or retrieve the engine
# and cache it in session_state.
def _ensure_engine(settings: Settings):
    if "engine" not in st.session_state:
        st.session_state["engine"] = get_engine(settings.db.url)
    return st.session_state["engine"]

def _build_pages():
    return [
        st.Page(render_subject_assignment, title="📚 Subject Assignments", url_path="subject_assignment", default=True),
        st.Page(render_catalog, title="📘 Course Catalog", url_path="catalog"),
    ]

def main():
    settings = load_settings()
    _configure_logging(settings)
    st.set_page_config(page_title=settings.app.name, layout="wide")

    # 1. Get or create the engine.
    engine = _ensure_engine(settings)

    # 2. Run database initialization ONCE per session.
    if "db_initialized" not in st.session_state:
        failed = init_db(engine)
        if failed:
            log.error(f"Schema installers failed: {failed}")
            st.error("Database schema initialization failed. See details below.")
            with st.expander("Diagnostics"):
                st.write(failed)
            st.stop()
        st.session_state["db_initialized"] = True

    nav = st.navigation(_build_pages(), position="sidebar")
    nav.run()


if __name__ == "__main__":
    main()

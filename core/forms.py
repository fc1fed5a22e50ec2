from __future__ import annotations
from typing import Dict, Optional
import streamlit as st

def tagline():
    st.caption("Instructors → Course Catalog → Subject Assignments")

def success(msg: str): st.success(msg)
def warn(msg: str): st.warning(msg)
def info(msg: str): st.info(msg)

def field_error(errors: Dict[str, str], field: str) -> Optional[str]:
    """Show the error for one form control, if any."""
    msg = errors.get(field)
    if msg:
        st.caption(f":red[{msg}]")
    return msg

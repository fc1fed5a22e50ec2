# core/db.py
from __future__ import annotations
from pathlib import Path
from typing import List
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from core.schema_registry import auto_discover, run_all

def get_engine(db_url: str) -> Engine:
    if db_url.startswith("sqlite:///"):
        db_file = db_url.replace("sqlite:///", "")
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(db_url, future=True)
    return engine

def init_db(engine: Engine) -> List[str]:
    """
    Create every table the app needs. Safe to call repeatedly.

    Returns the names of installers that failed (empty on success).
    """
    # 1) import schemas/*.py so their @register decorators run
    auto_discover("schemas")

    # 2) run all registered installers
    return run_all(engine)

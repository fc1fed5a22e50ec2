from __future__ import annotations
import yaml
from pathlib import Path
from typing import List
from pydantic import BaseModel

class AppConfig(BaseModel):
    name: str
    environment: str

class DBConfig(BaseModel):
    url: str

class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class AssignmentsConfig(BaseModel):
    sections: List[str] = ["A", "B", "C", "D"]
    academic_year_span: int = 3

class Settings(BaseModel):
    app: AppConfig
    db: DBConfig
    logging: LoggingConfig = LoggingConfig()
    assignments: AssignmentsConfig = AssignmentsConfig()

def load_settings(path: str | Path = Path(__file__).resolve().parents[1] / "config" / "settings.yaml") -> Settings:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return Settings(
        app=AppConfig(**data["app"]),
        db=DBConfig(**data["db"]),
        logging=LoggingConfig(**(data.get("logging") or {})),
        assignments=AssignmentsConfig(**(data.get("assignments") or {})),
    )

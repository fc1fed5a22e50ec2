"""
Tests for schema discovery and installation.
"""

import tempfile
import unittest
from pathlib import Path

from sqlalchemy import inspect

from core import schema_registry
from core.db import get_engine, init_db


class TestSchemaRegistry(unittest.TestCase):
    def test_init_db_creates_tables_and_is_repeatable(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            engine = get_engine(f"sqlite:///{Path(d) / 'nested' / 'app.db'}")
            self.assertEqual(init_db(engine), [])
            self.assertEqual(init_db(engine), [])
            tables = set(inspect(engine).get_table_names())
            engine.dispose()
        self.assertTrue({"instructors", "courses", "assignments", "students", "enrollments"} <= tables)

    def test_discovery_registers_each_installer_once(self) -> None:
        schema_registry.auto_discover("schemas")
        schema_registry.auto_discover("schemas")
        names = schema_registry.registered_names()
        self.assertEqual(len(names), len(set(names)))
        self.assertIn("install_assignments_schema", names)

    def test_failing_installer_is_reported(self) -> None:
        def broken(engine):
            raise RuntimeError("boom")

        schema_registry.register("test_broken_installer", broken)
        try:
            with tempfile.TemporaryDirectory() as d:
                engine = get_engine(f"sqlite:///{Path(d) / 'app.db'}")
                failed = schema_registry.run_all(engine)
                engine.dispose()
            self.assertEqual(failed, ["test_broken_installer"])
        finally:
            schema_registry._REGISTRY[:] = [
                (n, fn) for n, fn in schema_registry._REGISTRY if n != "test_broken_installer"
            ]


if __name__ == "__main__":
    unittest.main()

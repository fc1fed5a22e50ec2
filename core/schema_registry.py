# core/schema_registry.py
from __future__ import annotations
from typing import Callable, List, Tuple
from sqlalchemy.engine import Engine
import importlib
import logging
import pkgutil

log = logging.getLogger(__name__)

# Schema installer type
SchemaInstaller = Callable[[Engine], None]

# Registry: (name, installer_func)
_REGISTRY: List[Tuple[str, SchemaInstaller]] = []

def register(
    name: str | SchemaInstaller, installer: SchemaInstaller | None = None
) -> SchemaInstaller | Callable[[SchemaInstaller], SchemaInstaller]:
    """
    Registers a schema installer function.
    Can be used as a decorator (@register, @register("name")) or a plain call
    (register("name", fn)). Registering the same name twice keeps the first.
    """
    def _add(key: str, fn: SchemaInstaller) -> SchemaInstaller:
        if key not in {n for n, _ in _REGISTRY}:
            _REGISTRY.append((key, fn))
        return fn

    # Used as @register("name")
    if isinstance(name, str) and installer is None:
        def decorator(fn: SchemaInstaller) -> SchemaInstaller:
            return _add(name, fn)
        return decorator

    # Used as @register
    elif callable(name) and installer is None:
        return _add(name.__name__, name)

    # Used as register("name", fn)
    elif isinstance(name, str) and callable(installer):
        return _add(name, installer)

    raise TypeError("Invalid usage of @register")

def registered_names() -> List[str]:
    return [name for name, _ in _REGISTRY]

def run_all(engine: Engine) -> List[str]:
    """
    Runs all registered schema installers in registration order.

    A failing installer is logged and skipped so the others still run;
    the names of the failed installers are returned.
    """
    log.info(f"SchemaRegistry: running {len(_REGISTRY)} installers")
    failed: List[str] = []
    for name, installer_fn in _REGISTRY:
        try:
            log.debug(f"Applying schema: {name}")
            installer_fn(engine)
        except Exception:
            log.exception(f"Failed to apply schema {name}")
            failed.append(name)
    return failed

def auto_discover(package: str = "schemas") -> List[str]:
    """
    Import every module of ``package`` to trigger its @register decorators.

    Returns the imported module names.
    """
    pkg = importlib.import_module(package)
    discovered: List[str] = []
    for _, module_name, is_pkg in pkgutil.walk_packages(pkg.__path__, prefix=f"{package}."):
        if is_pkg:
            continue
        importlib.import_module(module_name)
        discovered.append(module_name)
    log.debug(f"Schema auto_discover: {discovered}")
    return discovered

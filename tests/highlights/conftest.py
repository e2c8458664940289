"""Shared fixtures for building fake KOReader libraries."""

import pytest

from highlights.store import invalidate_cache


def lua_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def lua_value(value) -> str:
    """Serialize a Python value the way KOReader dumps settings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return lua_string(value)
    if isinstance(value, list):
        items = [f"[{i}] = {lua_value(v)}" for i, v in enumerate(value, start=1)]
        return "{\n" + ",\n".join(items) + "\n}"
    if isinstance(value, dict):
        items = [f"[{lua_value(k)}] = {lua_value(v)}" for k, v in value.items()]
        return "{\n" + ",\n".join(items) + "\n}"
    raise TypeError(f"cannot serialize {value!r}")


def write_sidecar(book_dir, book_name: str, data: dict, ext: str = "epub"):
    """Write ``<book_name>.sdr/metadata.<ext>.lua`` under book_dir and return its path."""
    sdr = book_dir / f"{book_name}.sdr"
    sdr.mkdir(parents=True, exist_ok=True)
    path = sdr / f"metadata.{ext}.lua"
    path.write_text("-- we can read Lua syntax here!\nreturn " + lua_value(data) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_sidecar():
    return write_sidecar


@pytest.fixture(autouse=True)
def clear_store_cache():
    invalidate_cache()
    yield
    invalidate_cache()

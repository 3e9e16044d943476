from __future__ import annotations
import importlib.util
from pathlib import Path
import yaml
from typing import Dict, Any

SKETCHES_DIR = Path(__file__).resolve().parents[2] / "sketches"


def available_sketches(sketches_dir: Path = SKETCHES_DIR) -> list[str]:
    if not sketches_dir.is_dir():
        return []
    return sorted(
        p.name for p in sketches_dir.iterdir()
        if p.is_dir() and (p / "main.py").exists() and (p / "manifest.yaml").exists()
    )


def load_sketch_manifest(sketch_root: Path) -> Dict[str, Any]:
    manifest = sketch_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {sketch_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_sketch_module(sketch_root: Path):
    """
    Loads sketches/<id>/main.py module and returns the module object.
    The file must define a get_sketch() -> Sketch factory.
    """
    main_py = sketch_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {sketch_root}")
    spec = importlib.util.spec_from_file_location(f"sketches.{sketch_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_sketch"):
        raise AttributeError("Sketch module must define get_sketch()")
    return module

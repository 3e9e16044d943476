import logging

import pytest

from floatspace.api.config import CloudSettings, HaloSettings
from floatspace.app.loader import (
    SKETCHES_DIR,
    available_sketches,
    load_sketch_manifest,
    load_sketch_module,
)


def test_bundled_sketches_are_discovered():
    names = available_sketches()
    assert "resting" in names
    assert "drifting" in names


@pytest.mark.parametrize("sketch_id", ["resting", "drifting"])
def test_manifests_build_settings(sketch_id):
    manifest = load_sketch_manifest(SKETCHES_DIR / sketch_id)
    options = manifest["options"]
    if sketch_id == "resting":
        assert HaloSettings.from_options(options["halo"]).max_spread == 160
        assert manifest["camera"]["enabled"] is False
    else:
        settings = CloudSettings.from_options(options["clouds"])
        assert settings.repulsion_radius == 80
        assert settings.max_active_clouds == 600
        assert manifest["pose"]["enabled"] is True


@pytest.mark.parametrize("sketch_id", ["resting", "drifting"])
def test_modules_expose_factory(sketch_id):
    module = load_sketch_module(SKETCHES_DIR / sketch_id)
    assert callable(module.get_sketch)


def test_missing_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sketch_manifest(tmp_path)


def test_missing_main(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sketch_module(tmp_path)


def test_module_without_factory(tmp_path):
    (tmp_path / "main.py").write_text("X = 1\n")
    with pytest.raises(AttributeError):
        load_sketch_module(tmp_path)


def test_empty_manifest_is_a_dict(tmp_path):
    (tmp_path / "manifest.yaml").write_text("")
    assert load_sketch_manifest(tmp_path) == {}


def test_unknown_options_are_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="floatspace.api.config"):
        settings = HaloSettings.from_options({"max_spread": 40, "sparkle": True})
    assert settings.max_spread == 40
    assert "sparkle" in caplog.text


def test_no_options_gives_defaults():
    assert CloudSettings.from_options(None) == CloudSettings()

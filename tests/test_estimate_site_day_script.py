"""
End-to-end tests for scripts/estimate_site_day.py.
"""
import importlib.util
import json
from pathlib import Path

import pytest
import yaml

pytestmark = pytest.mark.integration

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "estimate_site_day.py"

SITE_DAY = {
    "site_id": "cordoba",
    "latitude": 38.0,
    "day_of_year": 214,
    "leaf_area_density": 1.88,
    "crown_volume_m3": 15.25,
    "planting_density": 24.5,
    "solar_radiation": 27.5,
    "mean_temperature_c": 28.0,
    "vpd_kpa": 2.4,
}


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("estimate_site_day", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_yaml_input(script, tmp_path, capsys):
    path = tmp_path / "site_day.yaml"
    path.write_text(yaml.safe_dump(SITE_DAY), encoding="utf-8")

    assert script.main(["--input", str(path)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["site_id"] == "cordoba"
    assert out["status"] == "ok"
    assert out["spacing_rule"] == "reference"
    assert out["fapar"] == pytest.approx(0.349552123139529, rel=1e-9)
    assert out["transpiration_mm"] == pytest.approx(2.10509054411218, rel=1e-9)


def test_json_input_with_corrected_rule(script, tmp_path, capsys):
    path = tmp_path / "site_day.json"
    path.write_text(json.dumps(dict(SITE_DAY, planting_density=800.0)), encoding="utf-8")

    assert script.main(["--input", str(path), "--spacing-rule", "corrected"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["spacing_rule"] == "corrected"
    assert out["spacing_band"] == "dense"


def test_validation_failure_exit_code(script, tmp_path):
    path = tmp_path / "polar.yaml"
    path.write_text(yaml.safe_dump(dict(SITE_DAY, latitude=80.0, day_of_year=172)), encoding="utf-8")

    assert script.main(["--input", str(path), "--validate"]) == 2


def test_missing_field_exit_code(script, tmp_path):
    incomplete = dict(SITE_DAY)
    del incomplete["vpd_kpa"]
    path = tmp_path / "incomplete.yaml"
    path.write_text(yaml.safe_dump(incomplete), encoding="utf-8")

    assert script.main(["--input", str(path)]) == 2


def test_missing_config_exit_code(script, tmp_path):
    path = tmp_path / "site_day.yaml"
    path.write_text(yaml.safe_dump(SITE_DAY), encoding="utf-8")

    assert script.main(["--input", str(path), "--config", str(tmp_path / "absent.yaml")]) == 2


def test_invalid_config_exit_code(script, tmp_path):
    path = tmp_path / "site_day.yaml"
    path.write_text(yaml.safe_dump(SITE_DAY), encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"interception": {"spacing_rule": "sideways"}}), encoding="utf-8")

    assert script.main(["--input", str(path), "--config", str(config_path)]) == 2


def test_malformed_yaml_exit_code(script, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("latitude: [38\n", encoding="utf-8")

    assert script.main(["--input", str(path)]) == 2

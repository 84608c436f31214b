import json
import logging

import pytest

from nik_parser import REGIONS_PATH, RegionDataError, RegionTable
from nik_parser.services.region_service import split_district_entry


def test_from_dict_converts_codes_to_int(region_table):
    assert region_table.province[31] == "DKI Jakarta"
    assert region_table.city[3171] == "Kota Jakarta Selatan"
    assert region_table.district[317105] == "Kebayoran Lama -- 12240"
    assert region_table.get("province.31") == "DKI Jakarta"
    assert region_table.get("province.99", "missing") == "missing"


def test_table_is_read_only(region_table):
    with pytest.raises(TypeError):
        region_table.province[99] = "Nowhere"


def test_table_truthiness():
    assert not RegionTable({}, {}, {})
    assert len(RegionTable({11: "Aceh"}, {}, {})) == 1


def test_load_from_file(regions_file):
    table = RegionTable.load(regions_file)
    assert table.province[32] == "Jawa Barat"
    assert len(table) == 7


def test_load_missing_file(tmp_path):
    path = str(tmp_path / "missing.json")
    with pytest.raises(RegionDataError) as exc:
        RegionTable.load(path)
    assert exc.value.path == path
    assert isinstance(exc.value.__cause__, OSError)


def test_load_invalid_json(tmp_path):
    path = tmp_path / "regions.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RegionDataError):
        RegionTable.load(str(path))


@pytest.mark.parametrize("data", [
    [],
    {"provinsi": {}, "kabkot": {}},
    {"provinsi": [], "kabkot": {}, "kecamatan": {}},
    {"provinsi": {"x1": "Aceh"}, "kabkot": {}, "kecamatan": {}},
])
def test_malformed_dataset(tmp_path, data):
    path = tmp_path / "regions.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(RegionDataError) as exc:
        RegionTable.load(str(path))
    assert exc.value.path == str(path)


def test_district_without_separator_warns(region_data, caplog):
    region_data["kecamatan"]["317199"] = "Tanpa Kode Pos"
    with caplog.at_level(logging.WARNING, logger="nik_parser.services.region_service"):
        table = RegionTable.from_dict(region_data)
    assert table.district[317199] == "Tanpa Kode Pos"
    assert "separator" in caplog.text


def test_district_without_separator_strict(region_data):
    region_data["kecamatan"]["317199"] = "Tanpa Kode Pos"
    with pytest.raises(RegionDataError):
        RegionTable.from_dict(region_data, strict=True)


def test_split_district_entry():
    assert split_district_entry("Gambir -- 10110") == ["Gambir", "10110"]
    assert split_district_entry("Gambir") == ["Gambir"]
    assert split_district_entry(None) == []


def test_bundled_dataset_is_strictly_valid():
    table = RegionTable.load(REGIONS_PATH, strict=True)
    assert table.province[31] == "DKI JAKARTA"
    assert len(table.province) == 38


def test_table_get_with_non_ascii_digit_segment(region_table):
    assert region_table.get("province.²") is None
    assert region_table.get("province.²", "missing") == "missing"

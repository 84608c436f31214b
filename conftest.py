import json

import pytest

from nik_parser import NikDecoder, RegionTable

REGION_DATA = {
    "provinsi": {
        "31": "DKI Jakarta",
        "32": "Jawa Barat",
    },
    "kabkot": {
        "3171": "Kota Jakarta Selatan",
        "3273": "Kota Bandung",
    },
    "kecamatan": {
        "317105": "Kebayoran Lama -- 12240",
        "317109": "Tebet -- 12810",
        "327301": "Sukasari -- 40151",
    },
}


@pytest.fixture
def region_data():
    return json.loads(json.dumps(REGION_DATA))


@pytest.fixture
def regions_file(tmp_path, region_data):
    path = tmp_path / "regions.json"
    path.write_text(json.dumps(region_data), encoding="utf-8")
    return str(path)


@pytest.fixture
def region_table(region_data):
    return RegionTable.from_dict(region_data)


@pytest.fixture
def decoder(regions_file):
    return NikDecoder(autoload_region=True, regions_path=regions_file)

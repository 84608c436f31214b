import json
import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict

from nik_parser.handler.errors import RegionDataError
from nik_parser.utils.lookup import data_get

logger = logging.getLogger(__name__)

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
REGIONS_PATH = os.path.join(ROOT_PATH, 'data/regions.json')

DISTRICT_SEPARATOR = " -- "

# dataset key -> table key
SECTIONS = {
    "provinsi": "province",
    "kabkot": "city",
    "kecamatan": "district",
}


class RegionTable:
    """
    Read-only region lookup table.

    ``province`` is keyed by the 2-digit province code, ``city`` by the 4-digit
    province+city code and ``district`` by the full 6-digit region code. District
    entries hold ``"<name> -- <postal code>"``.
    """

    def __init__(self, province: Dict[int, str], city: Dict[int, str], district: Dict[int, str]):
        self._data = MappingProxyType({
            "province": MappingProxyType(dict(province)),
            "city": MappingProxyType(dict(city)),
            "district": MappingProxyType(dict(district)),
        })

    @classmethod
    def from_dict(cls, data, strict: bool = False) -> "RegionTable":
        """Build a table from a decoded dataset (``provinsi``/``kabkot``/``kecamatan``)."""
        if not isinstance(data, Mapping):
            raise RegionDataError("Region dataset must be a JSON object")

        sections = {}
        for source_key, table_key in SECTIONS.items():
            if source_key not in data:
                raise RegionDataError(f"Region dataset is missing '{source_key}'")
            section = data[source_key]
            if not isinstance(section, Mapping):
                raise RegionDataError(f"Region dataset '{source_key}' must be an object")
            sections[table_key] = {cls._parse_code(source_key, code): str(name) for code, name in section.items()}

        cls._check_districts(sections["district"], strict)
        return cls(**sections)

    @classmethod
    def load(cls, path: str = REGIONS_PATH, strict: bool = False) -> "RegionTable":
        """Read and parse the region dataset at ``path``."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise RegionDataError(f"Cannot read region dataset {path}: {e}", path) from e
        except json.JSONDecodeError as e:
            raise RegionDataError(f"Region dataset {path} is not valid JSON: {e}", path) from e

        try:
            table = cls.from_dict(data, strict=strict)
        except RegionDataError as e:
            e.path = path
            raise

        logger.info(
            "Loaded region dataset %s (%d provinces, %d cities, %d districts)",
            path, len(table.province), len(table.city), len(table.district),
        )
        return table

    @staticmethod
    def _parse_code(section: str, code) -> int:
        try:
            return int(code)
        except (TypeError, ValueError) as e:
            raise RegionDataError(f"Region dataset '{section}' has a non-numeric code: {code!r}") from e

    @staticmethod
    def _check_districts(districts: Dict[int, str], strict: bool) -> None:
        broken = [code for code, entry in districts.items() if DISTRICT_SEPARATOR not in entry]
        if not broken:
            return
        if strict:
            raise RegionDataError(
                f"{len(broken)} district entries lack the '{DISTRICT_SEPARATOR.strip()}' separator, "
                f"first: {broken[0]}"
            )
        logger.warning(
            "%d district entries lack the '%s' separator; their postal codes will not resolve (first: %s)",
            len(broken), DISTRICT_SEPARATOR.strip(), broken[0],
        )

    @property
    def province(self) -> Mapping:
        return self._data["province"]

    @property
    def city(self) -> Mapping:
        return self._data["city"]

    @property
    def district(self) -> Mapping:
        return self._data["district"]

    def get(self, path, default=None):
        """Dotted lookup over the table, e.g. ``get("province.31")``."""
        return data_get(self._data, path, default)

    def __bool__(self) -> bool:
        return any(self._data[section] for section in self._data)

    def __len__(self) -> int:
        return sum(len(self._data[section]) for section in self._data)

    def __repr__(self) -> str:
        return (
            f"RegionTable(province={len(self.province)}, city={len(self.city)}, "
            f"district={len(self.district)})"
        )


def split_district_entry(value) -> list:
    """Split a composite district entry into ``[name, postal code]``."""
    if not value:
        return []
    return str(value).split(DISTRICT_SEPARATOR)

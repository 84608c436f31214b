import json
import logging
import datetime
from dataclasses import dataclass
from typing import Dict, Optional

from nik_parser.models.schemas import ParsedResult
from nik_parser.services.region_service import REGIONS_PATH, RegionTable, split_district_entry
from nik_parser.utils.lookup import data_get, to_int

logger = logging.getLogger(__name__)

NIK_LENGTH = 16

# 0 = male, +40 on the birth day = female
GENDER_BIAS = 40

FEMALE = 0
MALE = 1
GENDERS = {
    FEMALE: {"key": FEMALE, "text": "Perempuan"},
    MALE: {"key": MALE, "text": "Laki-Laki"},
}


def is_empty(value) -> bool:
    """True for None, empty values and the string "0"."""
    return not value or value == "0"


def clean(value) -> str:
    if is_empty(value):
        return ""
    value = str(value).strip()
    value = value.replace(" ", "")
    value = value.replace(".", "")
    return value


def is_female(value) -> bool:
    return to_int(value) >= GENDER_BIAS


def is_male(value) -> bool:
    return not is_female(value)


def get_gender_by_key(key) -> Optional[str]:
    key = to_int(key, default=None)
    if key is None:
        return None
    return data_get(GENDERS.get(key), "text")


def parse_century_birth(year, current_year: Optional[int] = None) -> str:
    """
    Guess the century of a 2-digit birth year.

    A year that would land after ``current_year`` in the 2000s is taken as 19xx,
    so the boundary moves forward every new year.
    """
    if current_year is None:
        current_year = datetime.date.today().year
    if to_int(year) + 2000 > current_year:
        return "19"
    return "20"


@dataclass(frozen=True)
class NikCode:
    """
    Normalized NIK with its fixed-offset fields.

    Layout: PPCCDD DDMMYY SSSS (province, city, district, birth date with the
    day biased by 40 for women, sequence number). Offsets are applied as-is to
    codes of any length, so a short code yields short or empty fields.
    """

    value: str = ""

    @classmethod
    def from_raw(cls, raw) -> "NikCode":
        return cls(clean(raw))

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value

    def is_valid(self) -> bool:
        return len(self.value) == NIK_LENGTH

    def region(self) -> str:
        return self.value[0:6]

    def province_code(self) -> str:
        return self.region()[0:2]

    def province_city_code(self) -> str:
        return self.region()[0:4]

    def city_code(self) -> str:
        return self.region()[2:4]

    def district_code(self) -> str:
        return self.region()[4:6]

    def birth_date_with_gender(self) -> str:
        return self.value[6:12]

    def birth_day_with_gender(self) -> str:
        return self.value[6:8]

    def birth_day(self) -> str:
        day = to_int(self.birth_day_with_gender())
        if is_female(day):
            day -= GENDER_BIAS
        return str(day).rjust(2, "0")

    def birth_date(self) -> str:
        return self.birth_day() + self.value[8:12]

    def birth_month(self) -> str:
        return self.birth_date()[2:4]

    def birth_year(self) -> str:
        return self.birth_date()[4:6]

    def full_year(self, current_year: Optional[int] = None) -> str:
        year = self.birth_year()
        return parse_century_birth(year, current_year) + year

    def birth_to_date(self, current_year: Optional[int] = None) -> Optional[datetime.date]:
        try:
            return datetime.date(
                to_int(self.full_year(current_year)),
                to_int(self.birth_month()),
                to_int(self.birth_day()),
            )
        except ValueError:
            logger.debug("NIK %r does not encode a calendar date", self.value)
            return None

    def gender(self) -> Optional[str]:
        if is_female(self.birth_day_with_gender()):
            return get_gender_by_key(FEMALE)
        return get_gender_by_key(MALE)

    def random_number(self) -> str:
        return self.value[-4:]

    def formatted(self) -> str:
        if not self.value:
            return ""
        return ".".join([
            self.province_code(),
            self.city_code(),
            self.district_code(),
            self.birth_date_with_gender(),
            self.random_number(),
        ])


class NikDecoder:
    """
    Decode a NIK and resolve its region names.

    Usage::

        decoder = NikDecoder(autoload_region=True)
        decoder.set_nik("3171050101990001").to_dict()

    The region table is loaded lazily by ``full_region``/``to_dict`` when the
    decoder was built without ``autoload_region``.
    """

    def __init__(self, autoload_region: bool = False, regions_path: str = REGIONS_PATH):
        self._code = NikCode()
        self._regions: Optional[RegionTable] = None
        self.regions_path = regions_path
        self.autoload_region(autoload_region)

    @classmethod
    def make(cls, autoload_region: bool = False, **kwargs) -> "NikDecoder":
        """Build a decoder, optionally loading the region table right away."""
        return cls(autoload_region, **kwargs)

    @property
    def nik(self) -> str:
        return self._code.value

    @property
    def code(self) -> NikCode:
        return self._code

    def set_nik(self, value) -> "NikDecoder":
        """
        Store the cleaned NIK and return the decoder for chaining.

        Empty input (None, "" or "0") keeps the current code on purpose.
        """
        if is_empty(value):
            logger.debug("Ignoring empty NIK, keeping %r", self._code.value)
            return self
        self._code = NikCode.from_raw(value)
        return self

    def clean(self, value) -> str:
        return clean(value)

    def length(self) -> int:
        return len(self._code)

    def is_valid(self) -> bool:
        """A NIK is valid when it has exactly 16 characters, nothing else is checked."""
        return self._code.is_valid()

    @staticmethod
    def list_gender() -> Dict[int, dict]:
        return {key: dict(gender) for key, gender in GENDERS.items()}

    @staticmethod
    def get_gender_by_key(key) -> Optional[str]:
        return get_gender_by_key(key)

    @staticmethod
    def is_female(value) -> bool:
        return is_female(value)

    @staticmethod
    def is_male(value) -> bool:
        return is_male(value)

    def parse_gender(self) -> Optional[str]:
        """Gender label from the birth day, "Perempuan" when the day is 40 or more."""
        return self._code.gender()

    def parse_birth_date_with_gender(self) -> str:
        return self._code.birth_date_with_gender()

    def parse_birth_day_with_gender(self) -> str:
        return self._code.birth_day_with_gender()

    def parse_birth_day(self) -> str:
        """Birth day with the female bias removed, zero padded."""
        return self._code.birth_day()

    def parse_birth_date(self) -> str:
        return self._code.birth_date()

    def parse_birth_month(self) -> str:
        return self._code.birth_month()

    def parse_birth_year(self) -> str:
        return self._code.birth_year()

    def parse_full_year(self, current_year: Optional[int] = None) -> str:
        """Four digit birth year, see ``parse_century_birth``."""
        return self._code.full_year(current_year)

    @staticmethod
    def parse_century_birth(year, current_year: Optional[int] = None) -> str:
        return parse_century_birth(year, current_year)

    def parse_birth_to_date(self, current_year: Optional[int] = None) -> Optional[datetime.date]:
        """
        Birth date as a ``datetime.date``.

        Returns None when the day, month and year do not form a real date.
        """
        return self._code.birth_to_date(current_year)

    def format_birth_date(self, current_year: Optional[int] = None) -> Optional[str]:
        birth_date = self.parse_birth_to_date(current_year)
        if birth_date is None:
            return None
        return birth_date.strftime("%d-%m-%Y")

    def parse_random_number(self) -> str:
        """Sequence number, always the last 4 characters."""
        return self._code.random_number()

    def formatted_nik(self) -> str:
        """Dotted form: province.city.district.birthdate.sequence"""
        return self._code.formatted()

    def formatted_number(self) -> str:
        return clean(self._code.value)

    @property
    def regions(self) -> Optional[RegionTable]:
        return self._regions

    def load_region_data(self) -> "NikDecoder":
        """Read the region dataset again, replacing any loaded table."""
        self._regions = RegionTable.load(self.regions_path)
        return self

    def autoload_region(self, toggle: bool = True) -> "NikDecoder":
        if toggle:
            self.load_region_data()
        return self

    def is_load_region(self) -> bool:
        return self._regions is not None

    def load_missing_region(self) -> "NikDecoder":
        """Load the region dataset only if no table is held yet."""
        if not self.is_load_region():
            self.load_region_data()
        return self

    def parse_region(self) -> str:
        return self._code.region()

    def parse_province_city_region(self) -> str:
        return self._code.province_city_code()

    def parse_province_region(self) -> str:
        return self._code.province_code()

    def parse_city_region(self) -> str:
        return self._code.city_code()

    def parse_district_region(self) -> str:
        return self._code.district_code()

    def _lookup(self, section: str, code: str) -> Optional[str]:
        if self._regions is None:
            return None
        return data_get(self._regions.get(section, {}), to_int(code))

    def get_province(self) -> Optional[str]:
        return self._lookup("province", self.parse_province_region())

    def get_city(self) -> Optional[str]:
        return self._lookup("city", self.parse_province_city_region())

    def get_district_with_postal_code(self) -> Optional[str]:
        """Raw district entry, "<name> -- <postal code>"."""
        return self._lookup("district", self.parse_region())

    def get_district(self) -> Optional[str]:
        return self.split_district(self.get_district_with_postal_code())

    def get_postal_code(self) -> Optional[str]:
        return self.split_postal_code(self.get_district_with_postal_code())

    @staticmethod
    def split_district(value) -> Optional[str]:
        return data_get(split_district_entry(value), 0)

    @staticmethod
    def split_postal_code(value) -> Optional[str]:
        return data_get(split_district_entry(value), 1)

    def province_full(self) -> dict:
        return {"code": self.parse_province_region(), "name": self.get_province()}

    def city_full(self) -> dict:
        return {"code": self.parse_province_city_region(), "name": self.get_city()}

    def district_full(self) -> dict:
        return {"code": self.parse_region(), "name": self.get_district()}

    def postal_code_full(self) -> dict:
        # No name: postal codes only exist inside the district entry.
        return {"code": self.get_postal_code()}

    def full_region(self) -> dict:
        """
        Province, city, district and postal code with their codes and names.
        Loads the region dataset when the decoder has none.
        """
        self.load_missing_region()
        return {
            "province": self.province_full(),
            "city": self.city_full(),
            "district": self.district_full(),
            "postal_code": self.postal_code_full(),
        }

    def to_result(self, current_year: Optional[int] = None) -> ParsedResult:
        """
        Build the full parse result for the current NIK.

        Loads the region dataset when missing, so a missing dataset raises
        ``RegionDataError`` here.
        """
        self.load_missing_region()
        return ParsedResult(
            valid=self.is_valid(),
            nik=self.nik,
            birth_date=self.format_birth_date(current_year),
            birth_city=self.get_city(),
            unique_code=self.parse_random_number(),
            gender=self.parse_gender(),
            **self.full_region(),
        )

    def to_dict(self, current_year: Optional[int] = None) -> dict:
        return self.to_result(current_year).model_dump()

    def parse(self, nik=None, current_year: Optional[int] = None) -> dict:
        """Set ``nik`` and return the result as a dict."""
        return self.set_nik(nik).to_dict(current_year)

    def to_json(self, current_year: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(current_year))

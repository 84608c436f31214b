from nik_parser.handler.errors import NikParserError, RegionDataError
from nik_parser.models.schemas import ParsedResult, PostalCodeSchema, RegionSchema
from nik_parser.services.nik_service import NikCode, NikDecoder
from nik_parser.services.region_service import REGIONS_PATH, RegionTable

__version__ = "1.0.0"


def parse(nik, autoload_region: bool = True) -> dict:
    """Decode ``nik`` with the bundled region dataset."""
    return NikDecoder(autoload_region).parse(nik)

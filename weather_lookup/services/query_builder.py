"""
Input validation and upstream query composition.

Everything here runs before any network call: a blank city or an unknown
country code never reaches the weather API.
"""

from weather_lookup.models.weather import WeatherQuery
from weather_lookup.utils.exceptions import EmptyCityError, InvalidCountryCodeError

# Officially assigned ISO 3166-1 alpha-2 codes.
ISO_ALPHA2_CODES: frozenset[str] = frozenset(
    """
    AD AE AF AG AI AL AM AO AQ AR AS AT AU AW AX AZ
    BA BB BD BE BF BG BH BI BJ BL BM BN BO BQ BR BS BT BV BW BY BZ
    CA CC CD CF CG CH CI CK CL CM CN CO CR CU CV CW CX CY CZ
    DE DJ DK DM DO DZ
    EC EE EG EH ER ES ET
    FI FJ FK FM FO FR
    GA GB GD GE GF GG GH GI GL GM GN GP GQ GR GS GT GU GW GY
    HK HM HN HR HT HU
    ID IE IL IM IN IO IQ IR IS IT
    JE JM JO JP
    KE KG KH KI KM KN KP KR KW KY KZ
    LA LB LC LI LK LR LS LT LU LV LY
    MA MC MD ME MF MG MH MK ML MM MN MO MP MQ MR MS MT MU MV MW MX MY MZ
    NA NC NE NF NG NI NL NO NP NR NU NZ
    OM
    PA PE PF PG PH PK PL PM PN PR PS PT PW PY
    QA
    RE RO RS RU RW
    SA SB SC SD SE SG SH SI SJ SK SL SM SN SO SR SS ST SV SX SY SZ
    TC TD TF TG TH TJ TK TL TM TN TO TR TT TV TW TZ
    UA UG UM US UY UZ
    VA VC VE VG VI VN VU
    WF WS
    YE YT
    ZA ZM ZW
    """.split()
)


def validate_city(city: str | None) -> str:
    """Return the trimmed city name, rejecting blank input"""
    city = (city or "").strip()
    if not city:
        raise EmptyCityError()
    return city


def _canonical_code(country_code: str) -> str | None:
    """Uppercase a two-letter ASCII code; None for anything else"""
    code = country_code.strip()
    # Checked before uppercasing: "ß".upper() is "SS"
    if len(code) != 2 or not code.isascii():
        return None
    return code.upper()


def is_valid_country_code(country_code: str | None) -> bool:
    """Case-insensitive membership test against the ISO alpha-2 set"""
    if not country_code:
        return False
    return _canonical_code(country_code) in ISO_ALPHA2_CODES


def normalize_country_code(country_code: str | None) -> str | None:
    """
    Trim and uppercase an optional country code.

    Returns None when no code was supplied.

    Raises:
        InvalidCountryCodeError: if a code was supplied but is not ISO alpha-2
    """
    if country_code is None or not country_code.strip():
        return None

    code = _canonical_code(country_code)
    if code not in ISO_ALPHA2_CODES:
        raise InvalidCountryCodeError(country_code)
    return code


def parse_query(city: str | None, country_code: str | None = None) -> WeatherQuery:
    """Validate both inputs and return a WeatherQuery"""
    return WeatherQuery(
        city=validate_city(city),
        country_code=normalize_country_code(country_code),
    )


def build_query(city: str | None, country_code: str | None = None) -> str:
    """Compose the upstream `q` term: "<city>" or "<city>,<countryCode>"."""
    return parse_query(city, country_code).term

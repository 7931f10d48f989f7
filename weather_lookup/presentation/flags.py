from weather_lookup.services.query_builder import is_valid_country_code

REGIONAL_INDICATOR_A = 0x1F1E6


def country_flag(country_code: str | None) -> str:
    """
    Flag glyph for an ISO alpha-2 code.

    The glyph is the pair of regional indicator symbols matching the two
    letters; unknown codes yield an empty string.
    """
    if not is_valid_country_code(country_code):
        return ""
    code = country_code.strip().upper()
    return "".join(chr(REGIONAL_INDICATOR_A + ord(letter) - ord("A")) for letter in code)

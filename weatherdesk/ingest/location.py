"""Location query sanitization shared by every outbound weather lookup."""

QUOTE_CHARS = "'\""


def clean_city_name(city: str) -> str:
    """Strip quote characters and surrounding whitespace."""
    return city.translate({ord(c): None for c in QUOTE_CHARS}).strip()


def build_location_query(city: str, country: str | None = None) -> str:
    """"City,CC" when a country code is given, else just the city."""
    name = clean_city_name(city)
    if country:
        return f"{name},{country.strip()}"
    return name

"""Directory field names and environment variable defaults."""

API_KEY_ENV_VAR = "OPENWEATHERMAP_API_KEY"

# Feed column -> OpenDataSoft dataset field
SORT_FIELDS: dict[str, str] = {
    "name": "name",
    "country": "cou_name_en",
    "countryCode": "country_code",
    "population": "population",
    "timezone": "timezone",
}

COUNTRY_FACET = "cou_name_en"

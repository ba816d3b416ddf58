from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


_WEATHER_EN = MappingProxyType(
    {
        "TSRA": "Thunderstorm with rain",
        "TS": "Thunderstorm",
        "RA": "Rain",
        "SHRA": "Light rain showers",
        "FZRA": "Freezing rain",
        "SN": "Snow",
        "SHSN": "Light snow showers",
        "GR": "Hail",
        "FZGR": "Freezing hail",
        "FG": "Fog",
        "HZ": "Haze",
        "BR": "Mist",
        "VC": "Nearby phenomenon",
        "BL": "Blizzard",
        "SQ": "Squall",
        "DS": "Sandstorm",
        "SS": "Snowstorm",
        "RAFG": "Rain and fog",
        "TSSN": "Thundersnow",
    }
)

_WEATHER_FR = MappingProxyType(
    {
        "TSRA": "Orage avec pluie",
        "TS": "Orage",
        "RA": "Pluie",
        "SHRA": "Averse de pluie légère",
        "FZRA": "Pluie verglaçante",
        "SN": "Neige",
        "SHSN": "Averse de neige légère",
        "GR": "Grêle",
        "FZGR": "Grêle verglaçante",
        "FG": "Brouillard",
        "HZ": "Haze (Brume)",
        "BR": "Brume légère",
        "VC": "Phénomène proche",
        "BL": "Blizzard",
        "SQ": "Squall (Rafale violente)",
        "DS": "Tempête de sable",
        "SS": "Tempête de neige",
        "RAFG": "Pluie et brouillard",
        "TSSN": "Orage de neige",
    }
)

_CLOUDS_EN = MappingProxyType(
    {
        "FEW": "Few clouds",
        "SCT": "Scattered clouds",
        "BKN": "Many clouds",
        "OVC": "Overcast sky",
        "CLR": "Clear sky",
        "NSC": "No significant clouds",
    }
)

_CLOUDS_FR = MappingProxyType(
    {
        "FEW": "Couverture nuageuse faible",
        "SCT": "Nuages épars",
        "BKN": "Nuages nombreux",
        "OVC": "Ciel couvert",
        "CLR": "Ciel clair",
        "NSC": "Pas de nuage particulier",
    }
)

# Indexed by round(degrees / 45) % 8.
_COMPASS_EN = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
_COMPASS_FR = ("Nord", "Nord-Est", "Est", "Sud-Est", "Sud", "Sud-Ouest", "Ouest", "Nord-Ouest")

_WIND_UNITS_EN = MappingProxyType({"KT": "knots", "MPS": "m/s"})
_WIND_UNITS_FR = MappingProxyType({"KT": "nœuds", "MPS": "m/s"})


@dataclass(frozen=True)
class Phrasebook:
    """Lookup tables and sentence templates for one output language.

    Templates use ``str.format`` fields; each decoder documents the fields it
    supplies.
    """

    language: str
    weather: Mapping[str, str]
    clouds: Mapping[str, str]
    compass: Tuple[str, ...]
    wind_units: Mapping[str, str]
    intensity: Mapping[str, str]

    station: str
    observation: str
    validity: str
    wind_directional: str
    wind_variable: str
    wind_gust: str
    visibility: str
    weather_line: str
    weather_line_qualified: str
    cloud_layer: str
    cloud_cumulonimbus: str
    cloud_unknown: str
    temperature: str
    pressure: str
    taf_from: str
    taf_becoming: str
    unknown: str

    empty_input: str
    failure: str


ENGLISH = Phrasebook(
    language="en",
    weather=_WEATHER_EN,
    clouds=_CLOUDS_EN,
    compass=_COMPASS_EN,
    wind_units=_WIND_UNITS_EN,
    intensity=MappingProxyType({"+": "strong", "-": "weak"}),
    station="Station: {token}",
    observation="Observation on day {day} at {hour}:{minute} UTC.",
    validity="Forecast valid from day {start_day} {start_hour}:00 UTC to day {end_day} {end_hour}:00 UTC.",
    wind_directional="Wind: from {direction} ({bearing}°) at {speed} {unit}{gust}.",
    wind_variable="Wind: variable wind at {speed} {unit}{gust}.",
    wind_gust=" with gusts up to {gust} {unit}",
    visibility="Visibility: {km} km.",
    weather_line="Weather: {description}.",
    weather_line_qualified="Weather: {description} ({qualifier}).",
    cloud_layer="{description} at {altitude} ft{cumulonimbus}.",
    cloud_cumulonimbus=" (with Cumulonimbus)",
    cloud_unknown="Clouds: unrecognized cloud code {token}.",
    temperature="Temperature: {temperature}°C, Dew point: {dew_point}°C.",
    pressure="Pressure: {hpa} hPa.",
    taf_from="Forecast change: from day {day} at {hour}:{minute} UTC.",
    taf_becoming="Forecast change: becoming, day {day} at {hour}:{minute} UTC.",
    unknown="Unrecognized: {token}",
    empty_input="Please provide a METAR or TAF report.",
    failure="An error occurred while decoding the METAR/TAF report.",
)

FRENCH = Phrasebook(
    language="fr",
    weather=_WEATHER_FR,
    clouds=_CLOUDS_FR,
    compass=_COMPASS_FR,
    wind_units=_WIND_UNITS_FR,
    intensity=MappingProxyType({"+": "fort", "-": "faible"}),
    station="Station: {token}",
    observation="Observation effectuée le jour {day} à {hour}h{minute} UTC.",
    validity="Période de validité : du jour {start_day} à {start_hour}h00 UTC au jour {end_day} à {end_hour}h00 UTC.",
    wind_directional="Vent de {direction} ({bearing}°) à {speed} {unit}{gust}.",
    wind_variable="Vent variable à {speed} {unit}{gust}.",
    wind_gust=" avec des rafales jusqu'à {gust} {unit}",
    visibility="Visibilité: {km} km.",
    weather_line="Phénomène météo: {description}.",
    weather_line_qualified="Phénomène météo: {description} ({qualifier}).",
    cloud_layer="{description} à {altitude} ft{cumulonimbus}.",
    cloud_cumulonimbus=" (avec cumulonimbus)",
    cloud_unknown="Code nuageux non reconnu : {token}.",
    temperature="Température: {temperature}°C, Point de rosée: {dew_point}°C.",
    pressure="Pression atmosphérique: {hpa} hPa.",
    taf_from="À partir du jour {day} à {hour}h{minute} UTC.",
    taf_becoming="Évolution vers le jour {day} à {hour}h{minute} UTC.",
    unknown="Non reconnu : {token}",
    empty_input="Veuillez fournir une chaîne METAR ou TAF.",
    failure="Une erreur s'est produite lors de l'analyse du METAR/TAF.",
)

PHRASEBOOKS: Mapping[str, Phrasebook] = MappingProxyType({"en": ENGLISH, "fr": FRENCH})

DEFAULT_LANGUAGE = "en"

# Phenomenon codes are the same in every phrasebook.
WEATHER_CODES = frozenset(_WEATHER_EN)


def get_phrasebook(language: str) -> Phrasebook:
    key = (language or DEFAULT_LANGUAGE).strip().lower()
    book = PHRASEBOOKS.get(key)
    if book is None:
        raise ValueError(f"Unsupported language: {language!r} (expected one of {sorted(PHRASEBOOKS)})")
    return book

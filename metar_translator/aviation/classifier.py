from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .tables import WEATHER_CODES


class Category(Enum):
    STATION = "station"
    TIME = "time"
    VALIDITY_PERIOD = "validity_period"
    WIND = "wind"
    VISIBILITY = "visibility"
    WEATHER_PHENOMENON = "weather_phenomenon"
    CLOUD_LAYER = "cloud_layer"
    TEMPERATURE_DEW_POINT = "temperature_dew_point"
    PRESSURE = "pressure"
    TAF_CHANGE = "taf_change"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedSegment:
    token: str
    category: Category
    index: int = 0


RE_TIME = re.compile(r"(?P<dd>\d{2})(?P<hh>\d{2})(?P<mm>\d{2})Z")
RE_VALIDITY = re.compile(r"(?P<d1>\d{2})(?P<h1>\d{2})/(?P<d2>\d{2})(?P<h2>\d{2})")
RE_WIND = re.compile(r"(?P<dir>VRB|\d{3})(?P<spd>\d{2})(G(?P<gst>\d{2}))?(?P<unit>KT|MPS)")
RE_VISIBILITY = re.compile(r"(?P<vis>\d{4})")
# Any three-letter cover code is accepted so unknown codes reach the decoder and get flagged.
RE_CLOUD = re.compile(r"(?P<amt>[A-Z]{3})(?P<hgt>\d{3})(?P<type>CB)?")
RE_TEMP_DEW = re.compile(r"(?P<t>M?\d{2})/(?P<d>M?\d{2})")
RE_PRESSURE = re.compile(r"Q(?P<hpa>\d{4})")
RE_TAF_CHANGE = re.compile(r"(?P<kind>FM|BECMG)(?P<dd>\d{2})(?P<hh>\d{2})(?P<mm>\d{2})")
RE_WEATHER = re.compile(r"(?P<sign>[+-])?(?P<code>[A-Z]{2,4})(?P<hgt>\d{3})?")
RE_STATION = re.compile(r"[A-Z]{4}")


def _is_weather(token: str) -> bool:
    m = RE_WEATHER.fullmatch(token)
    if not m:
        return False
    # A bare four-letter token is a phenomenon only when its code is known;
    # otherwise it is left for the station rule.
    if RE_STATION.fullmatch(token):
        return m.group("code") in WEATHER_CODES
    return True


_RULES: Tuple[Tuple[Category, Callable[[str], object]], ...] = (
    (Category.TIME, RE_TIME.fullmatch),
    (Category.VALIDITY_PERIOD, RE_VALIDITY.fullmatch),
    (Category.WIND, RE_WIND.fullmatch),
    (Category.VISIBILITY, RE_VISIBILITY.fullmatch),
    (Category.CLOUD_LAYER, RE_CLOUD.fullmatch),
    (Category.TEMPERATURE_DEW_POINT, RE_TEMP_DEW.fullmatch),
    (Category.PRESSURE, RE_PRESSURE.fullmatch),
    (Category.TAF_CHANGE, RE_TAF_CHANGE.fullmatch),
    (Category.WEATHER_PHENOMENON, _is_weather),
    (Category.STATION, RE_STATION.fullmatch),
)


def classify(token: str, index: Optional[int] = None) -> Category:
    """Return the category of a single token; first matching rule wins.

    The first token of a report (``index == 0``) is always the station.
    """
    if index == 0:
        return Category.STATION
    for category, rule in _RULES:
        if rule(token):
            return category
    return Category.UNKNOWN


def classify_tokens(tokens: Sequence[str]) -> List[ClassifiedSegment]:
    return [ClassifiedSegment(token=t, category=classify(t, i), index=i) for i, t in enumerate(tokens)]

from __future__ import annotations

from typing import Callable, Dict, Optional

from .classifier import (
    RE_CLOUD,
    RE_PRESSURE,
    RE_TAF_CHANGE,
    RE_TEMP_DEW,
    RE_TIME,
    RE_VALIDITY,
    RE_VISIBILITY,
    RE_WEATHER,
    RE_WIND,
    Category,
    ClassifiedSegment,
)
from .tables import Phrasebook

Decoder = Callable[[str, Phrasebook], Optional[str]]


def compass_octant(degrees: int) -> int:
    """Index (0-7) of the 45° sector containing ``degrees``; 360 wraps to north."""
    return int(round(degrees / 45)) % 8


def _decode_station(token: str, book: Phrasebook) -> Optional[str]:
    return book.station.format(token=token)


def _decode_time(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_TIME.fullmatch(token)
    if not m:
        return None
    return book.observation.format(day=m.group("dd"), hour=m.group("hh"), minute=m.group("mm"))


def _decode_validity(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_VALIDITY.fullmatch(token)
    if not m:
        return None
    return book.validity.format(
        start_day=m.group("d1"),
        start_hour=m.group("h1"),
        end_day=m.group("d2"),
        end_hour=m.group("h2"),
    )


def _decode_wind(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_WIND.fullmatch(token)
    if not m:
        return None
    unit = book.wind_units[m.group("unit")]
    speed = int(m.group("spd"))
    gust = ""
    if m.group("gst"):
        gust = book.wind_gust.format(gust=int(m.group("gst")), unit=unit)

    bearing = m.group("dir")
    if bearing == "VRB":
        return book.wind_variable.format(speed=speed, unit=unit, gust=gust)
    direction = book.compass[compass_octant(int(bearing))]
    return book.wind_directional.format(direction=direction, bearing=bearing, speed=speed, unit=unit, gust=gust)


def format_kilometres(meters: int) -> str:
    # Every significant digit is kept (9999 -> 9.999) with at least one decimal.
    text = f"{meters / 1000:.3f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def _decode_visibility(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_VISIBILITY.fullmatch(token)
    if not m:
        return None
    return book.visibility.format(km=format_kilometres(int(m.group("vis"))))


def _decode_weather(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_WEATHER.fullmatch(token)
    if not m:
        return None
    description = book.weather.get(m.group("code"))
    if description is None:
        return None
    qualifier = book.intensity.get(m.group("sign") or "")
    if qualifier:
        return book.weather_line_qualified.format(description=description, qualifier=qualifier)
    return book.weather_line.format(description=description)


def _decode_cloud(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_CLOUD.fullmatch(token)
    if not m:
        return None
    description = book.clouds.get(m.group("amt"))
    if description is None:
        return book.cloud_unknown.format(token=token)
    cumulonimbus = book.cloud_cumulonimbus if m.group("type") == "CB" else ""
    return book.cloud_layer.format(
        description=description,
        altitude=int(m.group("hgt")) * 100,
        cumulonimbus=cumulonimbus,
    )


def parse_signed_celsius(group: str) -> str:
    """``M05`` -> ``-5``, ``12`` -> ``12``. ``M00`` keeps its sign."""
    if group.startswith("M"):
        return f"-{int(group[1:])}"
    return str(int(group))


def _decode_temperature(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_TEMP_DEW.fullmatch(token)
    if not m:
        return None
    return book.temperature.format(
        temperature=parse_signed_celsius(m.group("t")),
        dew_point=parse_signed_celsius(m.group("d")),
    )


def _decode_pressure(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_PRESSURE.fullmatch(token)
    if not m:
        return None
    return book.pressure.format(hpa=m.group("hpa"))


def _decode_taf_change(token: str, book: Phrasebook) -> Optional[str]:
    m = RE_TAF_CHANGE.fullmatch(token)
    if not m:
        return None
    template = book.taf_from if m.group("kind") == "FM" else book.taf_becoming
    return template.format(day=m.group("dd"), hour=m.group("hh"), minute=m.group("mm"))


def _decode_unknown(token: str, book: Phrasebook) -> Optional[str]:
    return book.unknown.format(token=token)


_DECODERS: Dict[Category, Decoder] = {
    Category.STATION: _decode_station,
    Category.TIME: _decode_time,
    Category.VALIDITY_PERIOD: _decode_validity,
    Category.WIND: _decode_wind,
    Category.VISIBILITY: _decode_visibility,
    Category.WEATHER_PHENOMENON: _decode_weather,
    Category.CLOUD_LAYER: _decode_cloud,
    Category.TEMPERATURE_DEW_POINT: _decode_temperature,
    Category.PRESSURE: _decode_pressure,
    Category.TAF_CHANGE: _decode_taf_change,
    Category.UNKNOWN: _decode_unknown,
}


def decode(segment: ClassifiedSegment, book: Phrasebook) -> Optional[str]:
    """Render one classified token, or ``None`` when it yields no fragment."""
    return _DECODERS[segment.category](segment.token, book)

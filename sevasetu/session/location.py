# sevasetu/session/location.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

from sevasetu.errors import ActionUnavailableError, GeolocationUnavailableError
from sevasetu.session.context import Notice, SessionContext
from sevasetu.session.messages import Message, Role
from sevasetu.session.prescription import encode_uri_component

logger = logging.getLogger(__name__)

FALLBACK_KEYWORD = "health issue"
_DIAGNOSIS_LABEL = re.compile(r"^Diagnosis:\s*")


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


Locate = Callable[[], Awaitable[Coordinates]]


@dataclass(frozen=True)
class NearbySearch:
    url: str
    query: str
    bias: Optional[str] = None  # "coordinates", "location" or None
    notice: Optional[Notice] = None


def extract_diagnosis_keyword(messages: Iterable[Message]) -> str:
    """
    First paragraph of the latest assistant reply, without a leading
    "Diagnosis:" label.
    """
    last = None
    for m in messages:
        if m.role == Role.ASSISTANT and m.text:
            last = m
    if last is None:
        return FALLBACK_KEYWORD

    first_paragraph = last.text.split("\n\n", 1)[0]
    keyword = _DIAGNOSIS_LABEL.sub("", first_paragraph).strip()
    return keyword or FALLBACK_KEYWORD


def build_search_query(messages: Iterable[Message]) -> str:
    return f"{extract_diagnosis_keyword(messages)} hospitals and clinics"


async def find_nearby(
    ctx: SessionContext,
    locate: Locate,
    maps_search_url: str = "https://www.google.com/maps/search/?api=1",
) -> NearbySearch:
    """
    Build a map search for hospitals treating the last diagnosis.

    Device coordinates bias the search when available. Otherwise the
    stored profile location is appended, and without that the user is
    warned that results may be less relevant. A URL is returned in every
    case.
    """
    if not ctx.diagnosis_available:
        raise ActionUnavailableError("No diagnosis yet")

    query = build_search_query(ctx.messages)
    url = f"{maps_search_url}&query={encode_uri_component(query)}"

    try:
        coords = await locate()
    except GeolocationUnavailableError as e:
        logger.info("Geolocation unavailable: %s", e)
    else:
        return NearbySearch(
            url=f"{url}&ll={coords.latitude},{coords.longitude}",
            query=query,
            bias="coordinates",
        )

    location = ctx.profile.location if ctx.profile else None
    if location:
        return NearbySearch(
            url=f"{url}+near+{encode_uri_component(location)}",
            query=query,
            bias="location",
        )

    notice = ctx.notify("locationError", "locationErrorDescription")
    return NearbySearch(url=url, query=query, notice=notice)

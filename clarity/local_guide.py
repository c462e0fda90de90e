"""Nearby places from OpenStreetMap (Nominatim geocoding + Overpass)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .config import Settings
from .models import Location, PersonalityProfile

log = logging.getLogger("clarity.local_guide")

SEARCH_RADIUS_M = 5000
MAX_PLACES = 5

CATEGORY_TAGS = {
    "dating": "cafe|bar|restaurant",
    "gym": "fitness_centre|sports_centre",
    "jobs": "coworking_space|library",
    "wellness": "spa|yoga|meditation",
    "social": "community_centre|club",
}


class GeocodingError(RuntimeError):
    pass


def personalized_note(category: str, profile: PersonalityProfile) -> str:
    outgoing = profile.extraversion > 60
    if category == "dating":
        if outgoing:
            return "Your outgoing nature will shine in these social settings!"
        return "These spots are perfect for meaningful one-on-one connections."
    if category == "gym":
        if profile.conscientiousness > 60:
            return "Your disciplined approach will help you build a strong routine!"
        return "Start small - consistency matters more than intensity!"
    if category == "jobs":
        return "These spaces offer great networking and growth opportunities."
    if category == "wellness":
        return "These wellness spots align with your needs for self-care."
    if category == "social":
        if outgoing:
            return "Your social energy will flourish here!"
        return "These offer welcoming environments for connections."
    return "Here are personalized recommendations for you!"


def overpass_query(lat: str, lon: str, category: str) -> str:
    tags = CATEGORY_TAGS.get(category, "cafe")
    around = f"around:{SEARCH_RADIUS_M},{lat},{lon}"
    return f"""
[out:json][timeout:25];
(
  node["amenity"~"{tags}"]({around});
  way["amenity"~"{tags}"]({around});
  node["leisure"~"fitness_centre|sports_centre"]({around});
);
out center 10;
"""


def to_place(element: Dict[str, Any], category: str) -> Dict[str, str]:
    tags = element.get("tags") or {}
    street = tags.get("addr:street")
    if street:
        address = f"{tags.get('addr:housenumber') or ''} {street}".strip()
    else:
        address = "Address unavailable"
    return {
        "name": tags.get("name") or "Local venue",
        "type": tags.get("amenity") or tags.get("leisure") or category,
        "address": address,
    }


class LocalGuide:
    def __init__(self, http: httpx.Client, nominatim_url: str, overpass_url: str):
        self.http = http
        self.nominatim_url = nominatim_url
        self.overpass_url = overpass_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalGuide":
        http = httpx.Client(
            timeout=settings.geo_timeout,
            headers={"User-Agent": settings.geo_user_agent},
        )
        return cls(http, settings.nominatim_url, settings.overpass_url)

    def geocode(self, query: str) -> Optional[Tuple[str, str]]:
        resp = self.http.get(self.nominatim_url, params={"q": query, "format": "json", "limit": 1})
        resp.raise_for_status()
        data = resp.json()
        if not data:
            return None
        try:
            return str(data[0]["lat"]), str(data[0]["lon"])
        except (KeyError, IndexError, TypeError) as e:
            raise GeocodingError(f"Unexpected geocoder payload for {query!r}") from e

    def nearby(self, lat: str, lon: str, category: str) -> List[Dict[str, Any]]:
        resp = self.http.post(self.overpass_url, content=overpass_query(lat, lon, category))
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Overpass payload: {type(data).__name__}")
        elements = data.get("elements")
        if not isinstance(elements, list):
            return []
        return [el for el in elements if isinstance(el, dict)]

    def recommend(self, location: Location, category: str, profile: PersonalityProfile) -> Dict[str, Any]:
        """Places near `location`. Failures come back as `{"success": False, "message": ...}`."""
        query = ", ".join(p for p in (location.city, location.state, location.country) if p)
        try:
            coords = self.geocode(query)
            if coords is None:
                return {"success": False, "message": "Location not found"}
            elements = self.nearby(coords[0], coords[1], category)
        except (httpx.HTTPError, GeocodingError, ValueError) as e:
            log.warning("local recommendations failed location=%s category=%s error=%s", query, category, e)
            return {"success": False, "message": "Unable to fetch local recommendations"}

        places = [to_place(el, category) for el in elements[:MAX_PLACES]]
        log.info("local recommendations location=%s category=%s places=%d", query, category, len(places))
        return {
            "success": True,
            "category": category,
            "location": query,
            "recommendations": places,
            "personalizedNote": personalized_note(category, profile),
        }

    def close(self) -> None:
        self.http.close()

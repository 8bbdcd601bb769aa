"""장소 테이블 + 이동 시간

같은 장소 0분, 같은 구역 5분, 구역 간 15분.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from src.core.time import to_minutes

SAME_DISTRICT_TRAVEL_MINUTES = 5
CROSS_DISTRICT_TRAVEL_MINUTES = 15


class District(str, Enum):
    RESIDENTIAL = "residential"
    DOWNTOWN = "downtown"
    WATERFRONT = "waterfront"


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    description: str
    district: District
    open_time: Optional[str] = None
    close_time: Optional[str] = None


LOCATIONS: Dict[str, Location] = {
    loc.id: loc
    for loc in [
        Location("home", "Home", "Your cozy personal apartment", District.RESIDENTIAL),
        Location(
            "park",
            "Neighborhood Park",
            "Green space with walking paths and a duck pond",
            District.RESIDENTIAL,
        ),
        Location(
            "coffee_shop",
            "Corner Coffee Shop",
            "A cozy local cafe with warm atmosphere",
            District.RESIDENTIAL,
            "06:00",
            "22:00",
        ),
        Location(
            "library",
            "Public Library",
            "Quiet study spaces with extensive book collections",
            District.DOWNTOWN,
            "08:00",
            "20:00",
        ),
        Location(
            "shopping_district",
            "Shopping District",
            "Main street with shops, boutiques, and services",
            District.DOWNTOWN,
            "09:00",
            "21:00",
        ),
        Location(
            "gym",
            "Fitness Center",
            "Modern gym with equipment and fitness classes",
            District.DOWNTOWN,
            "05:00",
            "23:00",
        ),
        Location(
            "movie_theater",
            "Movie Theater",
            "Small cinema showing the latest films",
            District.DOWNTOWN,
            "12:00",
            "23:00",
        ),
        Location("beach", "Beach", "Sandy shoreline with beautiful ocean views", District.WATERFRONT),
        Location(
            "boardwalk",
            "Boardwalk",
            "Wooden pier with shops, arcade, and attractions",
            District.WATERFRONT,
            "10:00",
            "23:00",
        ),
        Location(
            "bar",
            "Seaside Bar & Grill",
            "Casual restaurant and bar with ocean views",
            District.WATERFRONT,
            "11:00",
            "02:00",
        ),
    ]
}


def get_location(location_id: str) -> Location:
    """알 수 없는 장소는 ValueError."""
    location = LOCATIONS.get(location_id)
    if location is None:
        raise ValueError(f"Unknown location: {location_id}")
    return location


def get_locations_by_district(district: District) -> List[Location]:
    return [loc for loc in LOCATIONS.values() if loc.district == district]


def calculate_travel_time(from_id: str, to_id: str) -> int:
    """두 장소 간 이동 시간(분)."""
    origin = get_location(from_id)
    destination = get_location(to_id)
    if origin.id == destination.id:
        return 0
    if origin.district == destination.district:
        return SAME_DISTRICT_TRAVEL_MINUTES
    return CROSS_DISTRICT_TRAVEL_MINUTES


def is_location_open(location_id: str, time: str) -> bool:
    """영업 시간 확인. 자정을 넘기는 영업(예: 11:00~02:00) 지원."""
    location = get_location(location_id)
    if location.open_time is None or location.close_time is None:
        return True

    now = to_minutes(time)
    opens = to_minutes(location.open_time)
    closes = to_minutes(location.close_time)

    if opens < closes:
        return opens <= now < closes
    return now >= opens or now < closes

"""
Solar geometry.

Declination, sunrise and sunset, hour angle, sun vector and orbit
eccentricity following Corripio (2003). Shared by the shortwave model
and the shadow map.

References:
- Corripio (2003) Int. J. Geographical Information Science,
  doi:10.1080/13658810210157796
- Spencer (1971) Search 2(5), 172
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np

DATE_FORMAT = '%Y-%m-%d %H:%M'

# Hours from sunrise/sunset within which the hour is nudged
SUNRISE_TOLERANCE = 0.01
SUNRISE_NUDGE = 0.1


@dataclass
class SolarGeometry:
    """Sun position for one location and instant."""
    declination: float         # [rad]
    hour: float                # Decimal hour of the day, after nudging [h]
    hour_angle: float          # [rad], 0 at solar noon
    sunrise: float             # [h]
    sunset: float              # [h]
    sun_vector: np.ndarray     # Unit vector towards the sun (x east, y south, z up)
    e0: float                  # Eccentricity correction factor [-]

    @property
    def is_daylight(self):
        return self.sunrise < self.hour < self.sunset

    @property
    def zenith(self):
        """Solar zenith angle [rad]."""
        return np.arccos(self.sun_vector[2])


def to_utc(date):
    """
    Normalize a timestamp to a naive UTC datetime.

    Accepts datetime objects (including pandas Timestamps) and strings
    formatted as 'YYYY-MM-DD HH:MM'. Naive datetimes are taken as UTC.
    """
    if isinstance(date, str):
        return datetime.strptime(date, DATE_FORMAT)
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc).replace(tzinfo=None)
    return date


def calc_declination(day_of_year):
    """
    Solar declination [rad] for a day of the year.

    Parameters
    ----------
    day_of_year : int
        Day of the year, 1 on January 1st
    """
    dayangb = np.radians((360.0 / 365.25) * (day_of_year - 79.436))

    return np.radians(0.3723 + 23.2567 * np.sin(dayangb)
                      - 0.758 * np.cos(dayangb)
                      + 0.1149 * np.sin(2 * dayangb)
                      + 0.3656 * np.cos(2 * dayangb)
                      - 0.1712 * np.sin(3 * dayangb)
                      + 0.0201 * np.cos(3 * dayangb))


def calc_sunrise_sunset(declination, latitude):
    """
    Sunrise and sunset hours.

    The hour-angle argument is clipped to [-1, 1] so that polar day
    spans the whole day and polar night has no daylight.

    Returns
    -------
    sunrise, sunset : float
        Decimal hours [h]
    """
    cos_ss = np.clip(-np.tan(declination) * np.tan(latitude), -1.0, 1.0)
    ss = np.arccos(cos_ss)

    sunrise = 12.0 * (1.0 - ss / np.pi)
    sunset = 12.0 * (1.0 + ss / np.pi)
    return sunrise, sunset


def calc_hour(date):
    """Decimal hour of the day from the milliseconds elapsed since midnight."""
    millis = ((date.hour * 60 + date.minute) * 60 + date.second) * 1000 \
        + date.microsecond // 1000
    return millis / 3600000.0


def nudge_hour(hour, sunrise, sunset):
    """
    Move an hour that falls just after sunrise or just before sunset
    away from the horizon, where the air mass formula is singular.
    """
    if sunrise < hour < sunset and (hour - sunrise) < SUNRISE_TOLERANCE:
        hour = hour + SUNRISE_NUDGE
    if sunrise < hour < sunset and (sunset - hour) < SUNRISE_TOLERANCE:
        hour = hour - SUNRISE_NUDGE
    return hour


def calc_hour_angle(hour):
    """Hour angle [rad]: 0 at noon, negative in the morning."""
    return (hour / 12.0 - 1.0) * np.pi


def calc_sun_vector(latitude, hour_angle, declination):
    """
    Unit vector in the direction of the sun (Corripio 2003).

    Parameters
    ----------
    latitude : float
        Latitude [rad]
    hour_angle : float
        Hour angle [rad]
    declination : float
        Solar declination [rad]

    Returns
    -------
    np.ndarray
        (x, y, z) with x towards east, y towards south, z up
    """
    return np.array([
        -np.sin(hour_angle) * np.cos(declination),
        np.sin(latitude) * np.cos(hour_angle) * np.cos(declination)
        - np.cos(latitude) * np.sin(declination),
        np.cos(latitude) * np.cos(hour_angle) * np.cos(declination)
        + np.sin(latitude) * np.sin(declination),
    ])


def calc_eccentricity(date):
    """
    Correction factor for the eccentricity of the Earth's orbit (Spencer 1971).

    The day angle is built from the day of the month, which keeps the
    output identical to existing runs of the model.
    """
    k = 2.0 * np.pi * (date.day - 1.0) / 365.0
    return (1.00011 + 0.034221 * np.cos(k) + 0.00128 * np.sin(k)
            + 0.000719 * np.cos(2 * k) + 0.000077 * np.sin(2 * k))


def solar_geometry(date, latitude):
    """
    Compute the sun position for an instant.

    Parameters
    ----------
    date : datetime or str
        Instant, UTC
    latitude : float
        Latitude [rad]

    Returns
    -------
    SolarGeometry
    """
    date = to_utc(date)

    declination = calc_declination(date.timetuple().tm_yday)
    sunrise, sunset = calc_sunrise_sunset(declination, latitude)
    hour = nudge_hour(calc_hour(date), sunrise, sunset)
    hour_angle = calc_hour_angle(hour)

    return SolarGeometry(
        declination=declination,
        hour=hour,
        hour_angle=hour_angle,
        sunrise=sunrise,
        sunset=sunset,
        sun_vector=calc_sun_vector(latitude, hour_angle, declination),
        e0=calc_eccentricity(date),
    )

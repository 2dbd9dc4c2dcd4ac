"""WorldWeatherOnline report data model.

Each provider report is modelled as a tree of dataclasses. A field's payload
location is stored in its metadata and its annotation selects the decoder
used for the element text (see wwo_decode.DECODERS):

    int, UInt, float, str      plain numeric and text values
    datetime.date              YYYY-MM-DD calendar dates
    Time12                     '3:04 PM' local clock times ('No moonrise' sentinel)
    TimeHMM                    930 / 1830 style local clock times
    <dataclass>                a nested element
    List[...]                  a repeated element
    Optional[...]              an element whose absence is meaningful

Values measured in two unit systems are kept as separate fields sourced
from separate payload elements. The one exception is the daily temperature
range, whose Fahrenheit values are converted from the Celsius values once at
decode time so the pair cannot drift.

Every field defaults to the zero value of its kind, and an element missing
from the payload leaves that default in place.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any, Callable, List, NewType, Optional

UInt = NewType("UInt", int)
Time12 = NewType("Time12", datetime.timedelta)
TimeHMM = NewType("TimeHMM", datetime.timedelta)

ZERO_DATE = datetime.date.min
ZERO_TIME = datetime.timedelta(0)


def xml(path: str, default: Any = 0, *, celsius: Optional[str] = None) -> Any:
    """Declares a scalar field read from the element at path.

        Args:
            path: ElementTree path relative to the owning element.
            default: The zero value left in place when the element is absent.
            celsius: For a Fahrenheit field, the name of the Celsius field it
                is converted from.
    """
    metadata = {"xml": path}
    if celsius is not None:
        metadata["celsius"] = celsius
    return field(default=default, metadata=metadata)


def xml_node(path: str, factory: Callable[[], Any]) -> Any:
    """Declares a nested structure read from the element at path."""
    return field(default_factory=factory, metadata={"xml": path})


def xml_list(path: str) -> Any:
    """Declares a repeated element, kept in payload order."""
    return field(default_factory=list, metadata={"xml": path})


def inline(factory: Callable[[], Any]) -> Any:
    """Declares a field group decoded from the owning element itself."""
    return field(default_factory=factory, metadata={"inline": True})


@dataclass
class Request:
    query: str = xml("query", "")  # The location query used
    type: str = xml("type", "")    # The type of location request


@dataclass
class Zone:
    offset: float = xml("utcOffset", 0.0)   # hr  Offset from UTC including fractional hours
    local_time: str = xml("localtime", "")  #     Local date and time, as sent


@dataclass
class Area:
    country: str = xml("country", "")
    latitude: float = xml("latitude", 0.0)
    longitude: float = xml("longitude", 0.0)
    name: str = xml("areaName", "")
    region: str = xml("region", "")
    population: UInt = xml("population")        #     Location's population
    distance: float = xml("distance_miles", 0.0)  # mi  Distance between query point and this area
    weather_url: str = xml("weatherUrl", "")
    zone: Optional[Zone] = xml("timezone", None)


@dataclass
class TempRange:
    max_temp: int = xml("maxtempC")                        # °C  Maximum temperature
    max_temp_f: int = xml("maxtempF", celsius="max_temp")  # °F  Maximum temperature
    min_temp: int = xml("mintempC")                        # °C  Minimum temperature
    min_temp_f: int = xml("mintempF", celsius="min_temp")  # °F  Minimum temperature


@dataclass
class Astronomy:
    """Local clock times of the day's astronomical events.

        An event that does not happen that day holds wwo_time.NO_EVENT.
    """
    moonrise: Time12 = xml("moonrise", ZERO_TIME)
    moonset: Time12 = xml("moonset", ZERO_TIME)
    sunrise: Time12 = xml("sunrise", ZERO_TIME)
    sunset: Time12 = xml("sunset", ZERO_TIME)


@dataclass
class Tide:
    time: Time12 = xml("tideTime", ZERO_TIME)  #    Local time of tide
    height: float = xml("tideHeight_mt", 0.0)  # m  Tide height
    type: str = xml("tide_type", "")           #    HIGH, LOW, NORMAL


@dataclass
class ForecastChances:
    chance_fog: UInt = xml("chanceoffog")             # %  Chance of fog
    chance_frost: UInt = xml("chanceoffrost")         # %  Chance of frost
    chance_overcast: UInt = xml("chanceofovercast")   # %  Chance of being cloudy
    chance_rain: UInt = xml("chanceofrain")           # %  Chance of rain
    chance_snow: UInt = xml("chanceofsnow")           # %  Chance of snow
    chance_high_temp: UInt = xml("chanceofhightemp")  # %  Chance of high temperatures
    chance_dry: UInt = xml("chanceofremdry")          # %  Chance of remaining dry
    chance_sunshine: UInt = xml("chanceofsunshine")   # %  Chance of being sunny
    chance_thunder: UInt = xml("chanceofthunder")     # %  Chance of thunder and/or lightning
    chance_windy: UInt = xml("chanceofwindy")         # %  Chance of being windy


@dataclass
class Condition:
    """One timestamped sample of weather measurements."""
    time: TimeHMM = xml("time", ZERO_TIME)             #        Local time since start of day
    cloud_cover: UInt = xml("cloudcover")              # %      Cloud cover amount
    dew_point: int = xml("DewPointC")                  # °C     Dew point temperature
    dew_point_f: int = xml("DewPointF")                # °F     Dew point temperature
    feels_like: int = xml("FeelsLikeC")                # °C     Feels like temperature
    feels_like_f: int = xml("FeelsLikeF")              # °F     Feels like temperature
    heat_index: int = xml("HeatIndexC")                # °C     Heat index temperature
    heat_index_f: int = xml("HeatIndexF")              # °F     Heat index temperature
    humidity: UInt = xml("humidity")                   # %      Humidity
    precip: float = xml("precipMM", 0.0)               # mm     Precipitation
    precip_inches: float = xml("precipInches", 0.0)    # in     Precipitation
    pressure: UInt = xml("pressure")                   # mbar   Atmospheric pressure
    pressure_inches: UInt = xml("pressureInches")      # in     Atmospheric pressure
    temp: int = xml("tempC")                           # °C     Temperature
    temp_f: int = xml("tempF")                         # °F     Temperature
    visibility: UInt = xml("visibility")               # km     Visibility
    visibility_miles: UInt = xml("visibilityMiles")    # mi     Visibility
    weather_code: UInt = xml("weatherCode")            #        Weather condition code
    weather_desc: str = xml("weatherDesc", "")         #        Weather condition description
    weather_icon_url: str = xml("weatherIconUrl", "")  #        URL to weather icon
    wind_chill: int = xml("WindChillC")                # °C     Wind chill temperature
    wind_chill_f: int = xml("WindChillF")              # °F     Wind chill temperature
    wind_dir: UInt = xml("winddirDegree")              # °EoN   Wind direction
    wind_dir_compass: str = xml("winddir16Point", "")  #        Wind direction 16-point compass
    wind_gust: UInt = xml("WindGustKmph")              # km/hr  Wind gust
    wind_gust_miles: UInt = xml("WindGustMiles")       # mi/hr  Wind gust
    wind_speed: UInt = xml("windspeedKmph")            # km/hr  Wind speed
    wind_speed_knots: UInt = xml("windspeedKnots")     # knots  Wind speed
    wind_speed_meter_sec: UInt = xml("windspeedMeterSec")  # m/s  Wind speed
    wind_speed_miles: UInt = xml("windspeedMiles")     # mi/hr  Wind speed


@dataclass
class CurrentCondition(Condition):
    """Observed conditions; the observation time is a 12-hour clock string."""
    temp: int = xml("temp_C")                             # °C  Temperature
    temp_f: int = xml("temp_F")                           # °F  Temperature
    time: Time12 = xml("observation_time", ZERO_TIME)     #     Time of the observation


@dataclass
class ForecastCondition(Condition):
    chances: ForecastChances = inline(ForecastChances)


@dataclass
class MarineCondition(Condition):
    sig_height: float = xml("sigHeight_m", 0.0)           # m     Significant wave height
    swell_height: float = xml("swellHeight_m", 0.0)       # m     Swell wave height
    swell_height_ft: float = xml("swellHeight_ft", 0.0)   # ft    Swell wave height
    swell_dir: UInt = xml("swellDir")                     # °EoN  Swell direction
    swell_dir_compass: str = xml("swellDir16Point", "")   #       Swell compass direction
    swell_period: float = xml("swellPeriod_secs", 0.0)    # sec   Swell period
    water_temp: int = xml("waterTemp_C")                  # °C    Water temperature
    water_temp_f: int = xml("waterTemp_F")                # °F    Water temperature


@dataclass
class LevelCondition:
    """Conditions at one elevation band of a ski resort."""
    temp: int = xml("tempC")                               # °C     Temperature
    temp_f: int = xml("tempF")                             # °F     Temperature
    wind_speed: UInt = xml("windspeedKmph")                # km/hr  Wind speed
    wind_speed_knots: UInt = xml("windspeedKnots")         # knots  Wind speed
    wind_speed_meter_sec: UInt = xml("windspeedMeterSec")  # m/s    Wind speed
    wind_speed_miles: UInt = xml("windspeedMiles")         # mi/hr  Wind speed
    wind_dir: UInt = xml("winddirDegree")                  # °EoN   Wind direction
    wind_dir_compass: str = xml("winddir16Point", "")      #        Wind direction 16-point compass
    weather_code: UInt = xml("weatherCode")                #        Weather condition code
    weather_desc: str = xml("weatherDesc", "")             #        Weather condition description
    weather_icon_url: str = xml("weatherIconUrl", "")      #        URL to weather icon


@dataclass
class SkiCondition:
    time: TimeHMM = xml("time", ZERO_TIME)             #       Local time since start of day
    chances: ForecastChances = inline(ForecastChances)
    top: LevelCondition = xml_node("top", LevelCondition)        # Conditions at top
    mid: LevelCondition = xml_node("mid", LevelCondition)        # Conditions at middle
    bottom: LevelCondition = xml_node("bottom", LevelCondition)  # Conditions at bottom
    cloud_cover: UInt = xml("cloudcover")              # %     Cloud cover amount
    visibility: UInt = xml("visibility")               # km    Visibility
    visibility_miles: UInt = xml("visibilityMiles")    # mi    Visibility
    pressure: UInt = xml("pressure")                   # mbar  Atmospheric pressure
    pressure_inches: UInt = xml("pressureInches")      # in    Atmospheric pressure
    snowfall: float = xml("snowfall_cm", 0.0)          # cm    Snowfall
    freeze_level: UInt = xml("freezeLevel")            # m     Freeze elevation
    humidity: UInt = xml("humidity")                   # %     Humidity
    precip: float = xml("precipMM", 0.0)               # mm    Precipitation
    precip_inches: float = xml("precipInches", 0.0)    # in    Precipitation


@dataclass
class Weather:
    """One day of weather, with its intra-day samples in time order."""
    temp_range: TempRange = inline(TempRange)
    astronomy: Astronomy = xml_node("astronomy", Astronomy)  # Astronomical information for the day
    date: datetime.date = xml("date", ZERO_DATE)  #     Date of forecast
    sun_hour: float = xml("sunHour", 0.0)         #     Total sun in hours
    total_snow: float = xml("totalSnow_cm", 0.0)  # cm  Total snowfall amount
    uv_index: UInt = xml("uvIndex")               #     UV Index
    conditions: List[Condition] = xml_list("hourly")


@dataclass
class ForecastWeather(Weather):
    conditions: List[ForecastCondition] = xml_list("hourly")


@dataclass
class MarineWeather(Weather):
    conditions: List[MarineCondition] = xml_list("hourly")
    tides: List[Tide] = xml_list("tides/tide_data")


@dataclass
class SkiWeather(Weather):
    """A ski resort day; the temperature range is also given per elevation band."""
    total_snow: float = xml("totalSnowfall_cm", 0.0)  # cm  Total snowfall amount
    chance_snow: UInt = xml("chanceofsnow")            # %   Chance of snow
    top: TempRange = xml_node("top", TempRange)
    mid: TempRange = xml_node("mid", TempRange)
    bottom: TempRange = xml_node("bottom", TempRange)
    conditions: List[SkiCondition] = xml_list("hourly")
    tides: List[Tide] = xml_list("tides/tide_data")


@dataclass
class ClimateAverage:
    """Long-run statistics for one calendar month.

        max_wind_speed and its unit variants are carried exactly as sent; the
        provider does not say whether it is an averaged or absolute maximum.
    """
    index: UInt = xml("index")                                 #        Month index 1-12
    name: str = xml("name", "")                                #        The name of the month
    min_temp: float = xml("avgMinTemp", 0.0)                   # °C     Average minimum temperature
    min_temp_f: float = xml("avgMinTemp_F", 0.0)               # °F     Average minimum temperature
    max_temp: float = xml("avgMaxTemp", 0.0)                   # °C     Average maximum temperature
    max_temp_f: float = xml("avgMaxTemp_F", 0.0)               # °F     Average maximum temperature
    abs_min_temp: float = xml("absMinTemp", 0.0)               # °C     Absolute minimum temperature
    abs_min_temp_f: float = xml("absMinTemp_F", 0.0)           # °F     Absolute minimum temperature
    abs_max_temp: float = xml("absMaxTemp", 0.0)               # °C     Absolute maximum temperature
    abs_max_temp_f: float = xml("absMaxTemp_F", 0.0)           # °F     Absolute maximum temperature
    temp: float = xml("avgTemp", 0.0)                          # °C     Average temperature
    temp_f: float = xml("avgTemp_F", 0.0)                      # °F     Average temperature
    max_wind_speed: float = xml("maxWindSpeed_kmph", 0.0)      # km/hr  Maximum wind speed
    max_wind_speed_mph: float = xml("maxWindSpeed_mph", 0.0)   # mi/hr  Maximum wind speed
    max_wind_speed_knots: float = xml("maxWindSpeed_knots", 0.0)  # knots  Maximum wind speed
    max_wind_speed_ms: float = xml("maxWindSpeed_ms", 0.0)     # m/s    Maximum wind speed
    wind_speed: float = xml("avgWindSpeed_kmph", 0.0)          # km/hr  Average wind speed
    wind_speed_miles: float = xml("avgWindSpeed_miles", 0.0)   # mi/hr  Average wind speed
    wind_speed_knots: float = xml("avgWindSpeed_knots", 0.0)   # knots  Average wind speed
    wind_speed_ms: float = xml("avgWindSpeed_ms", 0.0)         # m/s    Average wind speed
    wind_gust: float = xml("avgWindGust_kmph", 0.0)            # km/hr  Average wind gust
    wind_gust_miles: float = xml("avgWindGust_miles", 0.0)     # mi/hr  Average wind gust
    wind_gust_knots: float = xml("avgWindGust_knots", 0.0)     # knots  Average wind gust
    wind_gust_ms: float = xml("avgWindGust_ms", 0.0)           # m/s    Average wind gust
    daily_rainfall: float = xml("avgDailyRainfall", 0.0)       # mm     Average daily rainfall
    daily_rainfall_inch: float = xml("avgDailyRainfall_inch", 0.0)      # in  Average daily rainfall
    monthly_rainfall: float = xml("avgMonthlyRainfall", 0.0)   # mm     Average monthly rainfall
    monthly_rainfall_inch: float = xml("avgMonthlyRainfall_inch", 0.0)  # in  Average monthly rainfall
    humidity: float = xml("avgHumidity", 0.0)                  # %      Average humidity
    cloud: float = xml("avgCloud", 0.0)                        # %      Average cloud cover
    visibility: float = xml("avgVis_km", 0.0)                  # km     Average visibility
    visibility_miles: float = xml("avgVis_miles", 0.0)         # mi     Average visibility
    pressure: float = xml("avgPressure_mb", 0.0)               # mbar   Average pressure
    pressure_inch: float = xml("avgPressure_inch", 0.0)        # in     Average pressure
    dry_days: UInt = xml("avgDryDays")                         #        Average number of dry days
    rain_days: UInt = xml("avgRainDays")                       #        Average number of rain days
    snow_days: UInt = xml("avgSnowDays")                       #        Average number of snow days
    fog_days: UInt = xml("avgFogDays")                         #        Average number of foggy days
    thunder_days: UInt = xml("avgThunderDays")                 #        Average number of thunder days
    uv_index: UInt = xml("avgUVIndex")                         #        Average UV Index
    sun_hour: float = xml("avgSunHour", 0.0)                   # hr/day Average sun


# Reports. Every report carries the provider's error message, if any, under
# 'error'; a report with an error is only partially reliable.

@dataclass
class Local:
    error: Optional[str] = xml("error/msg", None)
    request: Request = xml_node("request", Request)
    area: Area = xml_node("nearest_area", Area)
    current: CurrentCondition = xml_node("current_condition", CurrentCondition)
    weather: List[ForecastWeather] = xml_list("weather")
    climate: List[ClimateAverage] = xml_list("ClimateAverages/month")


@dataclass
class Marine:
    error: Optional[str] = xml("error/msg", None)
    request: Request = xml_node("request", Request)
    area: Area = xml_node("nearest_area", Area)
    weather: List[MarineWeather] = xml_list("weather")


@dataclass
class PastMarine(Marine):
    pass


@dataclass
class PastLocal:
    error: Optional[str] = xml("error/msg", None)
    request: Request = xml_node("request", Request)
    area: Area = xml_node("nearest_area", Area)
    weather: List[Weather] = xml_list("weather")


@dataclass
class Ski:
    error: Optional[str] = xml("error/msg", None)
    request: Request = xml_node("request", Request)
    area: Area = xml_node("nearest_area", Area)
    weather: List[SkiWeather] = xml_list("weather")


@dataclass
class Search:
    error: Optional[str] = xml("error/msg", None)
    areas: List[Area] = xml_list("result")


@dataclass
class TimeZone:
    error: Optional[str] = xml("error/msg", None)
    request: Request = xml_node("request", Request)
    area: Area = xml_node("nearest_area", Area)
    zone: Zone = xml_node("time_zone", Zone)

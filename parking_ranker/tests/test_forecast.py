from parking_ranker.ranking.models import Coordinate
from parking_ranker.weather.forecast import District, DistrictForecastResolver, Forecast

PAYLOAD = {
    "area_metadata": [
        {"name": "Jurong West", "label_location": {"latitude": 1.34039, "longitude": 103.705}},
        {"name": "City", "label_location": {"latitude": 1.292, "longitude": 103.844}},
        {"name": "Changi", "label_location": {"latitude": 1.357, "longitude": 103.987}},
    ],
    "items": [
        {
            "forecasts": [
                {"area": "Jurong West", "forecast": "Thundery Showers"},
                {"area": "City", "forecast": "Partly Cloudy (Night)"},
            ]
        }
    ],
}

BOON_LAY = Coordinate(latitude=1.3432438, longitude=103.682751)


def test_from_payload_resolves_nearest_district():
    resolver = DistrictForecastResolver.from_payload(PAYLOAD)
    forecast = resolver.forecast(BOON_LAY)
    assert forecast.district_name == "Jurong West"
    assert forecast.forecast_text == "Thundery Showers"
    assert forecast.is_rain("Showers")


def test_dry_district():
    resolver = DistrictForecastResolver.from_payload(PAYLOAD)
    forecast = resolver.forecast(Coordinate(latitude=1.29, longitude=103.85))
    assert forecast.district_name == "City"
    assert not forecast.is_rain("Showers")


def test_district_without_forecast_entry():
    resolver = DistrictForecastResolver.from_payload(PAYLOAD)
    forecast = resolver.forecast(Coordinate(latitude=1.36, longitude=103.99))
    assert forecast.district_name == "Changi"
    assert forecast.forecast_text is None
    assert not forecast.is_rain("Showers")


def test_no_districts_yields_empty_forecast():
    resolver = DistrictForecastResolver([], {})
    assert resolver.nearest_district(1.3, 103.8) is None
    assert resolver.forecast(BOON_LAY) == Forecast()


def test_empty_payload():
    resolver = DistrictForecastResolver.from_payload({})
    assert resolver.forecast(BOON_LAY).district_name is None


def test_nearest_district_first_of_equal_minima():
    districts = [
        District(name="North", latitude=1.0, longitude=0.0),
        District(name="South", latitude=-1.0, longitude=0.0),
    ]
    resolver = DistrictForecastResolver(districts, {"North": "Fair", "South": "Fair"})
    assert resolver.nearest_district(0.0, 0.0).name == "North"


def test_is_rain_matches_substring_only():
    assert Forecast(forecast_text="Light Showers").is_rain("Showers")
    assert not Forecast(forecast_text="Light Rain").is_rain("Showers")
    assert not Forecast().is_rain("Showers")

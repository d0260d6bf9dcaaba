from __future__ import annotations

from datetime import datetime

import pytest

from yolp.entities import (
    ZERO_TIME,
    Datum,
    Document,
    GeometryType,
    StyleType,
    VertexType,
    Weather,
    WeatherType,
)
from yolp.errors import DecodeError


PLACE_PAYLOAD = {
    "ResultInfo": {
        "Count": 1,
        "Total": 1,
        "Start": 1,
        "Status": 200,
        "Latency": 0.0032,
        "Description": "",
        "Copyright": "(C) Yahoo Japan Corporation.",
    },
    "Feature": [
        {
            "Id": "201304081325_139.73229_35.68123",
            "Name": "地点(35.68123,139.73229)の2013年04月08日 13時25分から60分間の天気情報",
            "Geometry": {"Type": "point", "Coordinates": "139.73229,35.68123"},
            "Property": {
                "WeatherAreaCode": 4410,
                "WeatherList": {
                    "Weather": [
                        {"Type": "observation", "Date": "201304081325", "Rainfall": 0.00},
                        {"Type": "forecast", "Date": "201304081335", "Rainfall": 1.35},
                        {"Type": "forecast", "Date": "201304081345", "Rainfall": 0.00},
                    ]
                },
            },
        }
    ],
}


def test_weather_predicates():
    observed = Weather(type=WeatherType.OBSERVATION, date="202403011230", rainfall=0.0)
    forecast = Weather(type=WeatherType.FORECAST, date="202403011240", rainfall=2.5)

    assert observed.is_observation() and not observed.is_forecast()
    assert forecast.is_forecast() and not forecast.is_observation()
    assert not observed.is_raining()
    assert forecast.is_raining()
    assert not Weather(rainfall=-1.0).is_raining()


def test_weather_time_parses_local_time():
    assert Weather(date="202403011230").time() == datetime(2024, 3, 1, 12, 30)


@pytest.mark.parametrize("value", ["bad", "", "2024030112", "202413011230", "20240301123x"])
def test_weather_time_degrades_to_zero_time(value):
    assert Weather(date=value).time() == ZERO_TIME


def test_document_decoding():
    document = Document.from_dict(PLACE_PAYLOAD)

    assert document.result_info.status == 200
    assert document.result_info.count == 1
    assert document.result_info.latency == pytest.approx(0.0032)
    assert len(document.features) == 1

    feature = document.features[0]
    assert feature.geometry.type is GeometryType.POINT
    assert feature.geometry.points() == [(35.68123, 139.73229)]
    assert feature.property.weather_area_code == 4410

    weather = feature.property.weather_list
    assert len(weather.weather) == 3
    assert len(weather.observations()) == 1
    assert len(weather.forecasts()) == 2
    assert weather.forecasts()[0].is_raining()
    assert weather.observations()[0].time() == datetime(2013, 4, 8, 13, 25)


def test_document_defaults_for_missing_sections():
    document = Document.from_dict({})

    assert document.result_info.status == 0
    assert document.features == ()
    assert document.dictionary.styles == ()


def test_zip_code_feature_with_styles_and_routes():
    document = Document.from_dict(
        {
            "ResultInfo": {"Count": 1, "Status": 200},
            "Feature": [
                {
                    "Id": "1",
                    "Name": "東京都千代田区丸の内",
                    "Category": ["zip"],
                    "Geometry": {
                        "Type": "multigeometry",
                        "Datum": "wgs",
                        "Geometry": [
                            {"Type": "point", "Coordinates": "139.76,35.68"},
                            {"Type": "circle", "Coordinates": "139.77,35.69", "Radius": "500"},
                        ],
                    },
                    "Property": {"Address": "東京都千代田区丸の内", "CountryCode": "JP"},
                    "Style": {"Id": "icon-1"},
                    "RouteInfo": [
                        {
                            "Edge": [
                                {
                                    "Id": "e1",
                                    "Vertex": [{"Type": "Start"}, {"Type": "End"}],
                                }
                            ]
                        }
                    ],
                }
            ],
            "Dictionary": {
                "Style": [
                    {"Id": "icon-1", "Type": "icon", "Image": "https://example.test/pin.png", "Opacity": "0.5"},
                    {"Id": "line-1", "Type": "line", "Color": "ff0000", "EndLine": "arrow"},
                ]
            },
        }
    )

    feature = document.features[0]
    assert feature.category == ("zip",)
    assert feature.geometry.datum is Datum.WGS
    assert [child.type for child in feature.geometry.geometries] == [GeometryType.POINT, GeometryType.CIRCLE]
    assert feature.geometry.geometries[1].radius == "500"
    assert feature.property.country_code == "JP"
    assert [vertex.type for vertex in feature.route_info[0].edges[0].vertices] == [VertexType.START, VertexType.END]

    style = document.dictionary.style(feature.style.id)
    assert style is not None
    assert style.type is StyleType.ICON
    assert style.opacity == 0.5
    assert document.dictionary.style("missing") is None


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"Feature": {"Id": "not-a-list"}},
        {"Feature": ["not-an-object"]},
        {"ResultInfo": {"Status": "teapot"}},
        {"Feature": [{"Geometry": {"Type": "hexagon"}}]},
        {"Feature": [{"Geometry": {"Type": "point", "Geometry": [{"Type": "point"}]}}]},
    ],
)
def test_document_shape_errors(payload):
    with pytest.raises(DecodeError):
        Document.from_dict(payload)


def test_points_rejects_malformed_coordinates():
    document = Document.from_dict({"Feature": [{"Geometry": {"Type": "linestring", "Coordinates": "139.1 35.2"}}]})

    with pytest.raises(DecodeError):
        document.features[0].geometry.points()


def test_unknown_tags_keep_raw_values():
    document = Document.from_dict(
        {
            "Feature": [
                {
                    "Geometry": {"Type": "point", "Datum": "tkw"},
                    "Property": {"WeatherList": {"Weather": [{"Type": "nowcast", "Rainfall": 1.0}]}},
                    "RouteInfo": [{"Edge": [{"Vertex": [{"Type": "Via"}]}]}],
                }
            ],
            "Dictionary": {"Style": [{"Id": "s1", "Type": "label", "StartLine": "dot"}]},
        }
    )

    feature = document.features[0]
    assert feature.geometry.type is GeometryType.POINT
    assert feature.geometry.datum == "tkw"
    weather = feature.property.weather_list.weather[0]
    assert weather.type == "nowcast"
    assert not weather.is_observation() and not weather.is_forecast()
    assert feature.route_info[0].edges[0].vertices[0].type == "Via"
    style = document.dictionary.style("s1")
    assert style.type == "label"
    assert style.start_line == "dot"

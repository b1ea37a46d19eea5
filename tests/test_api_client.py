"""不動産情報ライブラリAPIクライアントのテスト"""

from unittest.mock import patch

import pytest
import requests

import config
from api_client import ReinfolibClient
from models import TileCoordinate
from tests.helpers import make_response


def test_requires_api_key():
    with pytest.raises(ValueError):
        ReinfolibClient()


def test_session_carries_subscription_key():
    client = ReinfolibClient("abc")
    assert client._session.headers["Ocp-Apim-Subscription-Key"] == "abc"


def test_fetch_zoning_tile_request():
    payload = {
        "type": "FeatureCollection",
        "features": [{"type": "Feature", "geometry": None, "properties": {}}, "junk"],
    }
    with ReinfolibClient("abc") as client:
        with patch.object(client._session, "get", return_value=make_response(payload)) as get:
            features = client.fetch_zoning_tile(TileCoordinate(x=29100, y=12903, z=15))

    assert features == [payload["features"][0]]
    url = get.call_args.args[0]
    assert url == f"{config.API_BASE_URL}/XKT002"
    assert get.call_args.kwargs["params"] == {
        "response_format": "geojson", "z": 15, "x": 29100, "y": 12903,
    }
    assert get.call_args.kwargs["timeout"] == config.ZONING_TIMEOUT


def test_fetch_zoning_tile_without_features():
    with ReinfolibClient("abc") as client:
        with patch.object(client._session, "get", return_value=make_response({"type": "FeatureCollection"})):
            assert client.fetch_zoning_tile(TileCoordinate(1, 2, 15)) == []


def test_fetch_zoning_tile_rejects_non_object():
    with ReinfolibClient("abc") as client:
        with patch.object(client._session, "get", return_value=make_response([1, 2])):
            with pytest.raises(ValueError):
                client.fetch_zoning_tile(TileCoordinate(1, 2, 15))


def test_http_error_propagates():
    resp = make_response({}, status_code=401)
    resp.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized", response=resp)
    with ReinfolibClient("abc") as client:
        with patch.object(client._session, "get", return_value=resp):
            with pytest.raises(requests.HTTPError):
                client.fetch_zoning_tile(TileCoordinate(1, 2, 15))

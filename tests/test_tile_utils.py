"""タイル座標変換のテスト"""

import math

import pytest

from models import TileCoordinate
from tile_utils import deg2tile, lat_lon_to_tile


def _reference_tile(lat, lon, zoom):
    n = 2 ** zoom
    lat_rad = math.radians(lat)
    x = math.floor((lon + 180) / 360 * n)
    y = math.floor((1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2 * n)
    return x, y


def test_zoom_zero_is_single_tile():
    assert deg2tile(35.0, 139.0, 0) == (0, 0)


def test_equator_and_prime_meridian():
    assert deg2tile(0.0, 0.0, 1) == (1, 1)
    assert deg2tile(0.0, -180.0, 1) == (0, 1)
    assert deg2tile(10.0, -10.0, 1) == (0, 0)


@pytest.mark.parametrize("lat, lon", [
    (35.6938, 139.7029),   # 新宿
    (34.6687, 135.5013),   # 難波
    (43.0621, 141.3544),   # 札幌
    (26.2124, 127.6809),   # 那覇
])
def test_matches_slippy_map_formula(lat, lon):
    assert deg2tile(lat, lon, 15) == _reference_tile(lat, lon, 15)


def test_lat_lon_to_tile_returns_coordinate():
    tile = lat_lon_to_tile(35.6938, 139.7029, 15)
    assert isinstance(tile, TileCoordinate)
    assert tile.z == 15
    assert (tile.x, tile.y) == deg2tile(35.6938, 139.7029, 15)
    assert 0 <= tile.x < 2 ** 15
    assert 0 <= tile.y < 2 ** 15

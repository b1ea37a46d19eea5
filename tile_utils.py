"""緯度経度 ↔ タイル座標変換"""

import math

from models import TileCoordinate


def deg2tile(lat: float, lon: float, zoom: int) -> tuple[int, int]:
    """緯度経度からタイル座標 (x, y) を返す。"""
    lat_rad = math.radians(lat)
    n = 2 ** zoom
    x = math.floor((lon + 180.0) / 360.0 * n)
    y = math.floor((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n)
    return x, y


def lat_lon_to_tile(lat: float, lon: float, zoom: int) -> TileCoordinate:
    """緯度経度を含む XYZ タイルを返す。

    https://wiki.openstreetmap.org/wiki/Slippy_map_tilenames
    """
    x, y = deg2tile(lat, lon, zoom)
    return TileCoordinate(x=x, y=y, z=zoom)

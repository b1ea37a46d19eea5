"""点とポリゴンの内外判定（ray casting）"""

import logging
from collections.abc import Sequence

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon, shape

logger = logging.getLogger(__name__)


def point_in_ring(lon: float, lat: float, ring: Sequence[Sequence[float]]) -> bool:
    """点がリング内にあるかを判定する。

    点から +x 方向へ伸ばした半直線と辺の交差回数で判定する。境界は半開区間で、
    西端・南端の辺上の点は内側、東端・北端の辺上の点は外側として扱われる。
    """
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        if (yi > lat) != (yj > lat):
            x_cross = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lon < x_cross:
                inside = not inside
        j = i
    return inside


def exterior_rings(geometry: dict | None) -> list[list[tuple[float, float]]]:
    """GeoJSON geometry から各ポリゴンの外輪を取り出す。

    穴（内輪）は無視する。用途地域の判定精度ではこれで十分。
    Polygon / MultiPolygon 以外や不正なジオメトリは空リスト。
    """
    if not isinstance(geometry, dict) or geometry.get("type") not in ("Polygon", "MultiPolygon"):
        return []
    try:
        geom = shape(geometry)
    except (GEOSException, ValueError, TypeError, IndexError, KeyError) as e:
        logger.debug("ジオメトリ解析失敗: %s", e)
        return []

    if isinstance(geom, Polygon):
        polygons = [geom]
    elif isinstance(geom, MultiPolygon):
        polygons = list(geom.geoms)
    else:
        return []
    return [list(p.exterior.coords) for p in polygons if not p.is_empty]


def point_in_feature(lon: float, lat: float, feature: dict) -> bool:
    """点がフィーチャー（Polygon / MultiPolygon）内にあるか。最初にヒットした外輪で確定。"""
    return any(
        point_in_ring(lon, lat, ring)
        for ring in exterior_rings(feature.get("geometry"))
    )

"""緯度経度から用途地域を判定する

国土交通省「不動産情報ライブラリ」XKT002（都市計画決定GISデータ・用途地域）の
ベクトルタイルを取得し、点を含むポリゴンの用途地域名を13種類の用途地域に対応付ける。
https://www.reinfolib.mlit.go.jp/help/apiManual/#titleApi10
"""

import logging
import math
import re

import requests

import config
from api_client import ReinfolibClient
from geometry import point_in_feature
from models import ZoningCategory, ZoningLookupResult
from tile_utils import lat_lon_to_tile
from zoning_data import ZONING_NAME_TO_CODE, ZONING_TYPES, get_zoning_by_code

logger = logging.getLogger(__name__)

_DIGIT_TO_KANJI = str.maketrans(
    "0123456789０１２３４５６７８９",
    "〇一二三四五六七八九〇一二三四五六七八九",
)
_WHITESPACE_RE = re.compile(r"\s+")


# ---- 用途地域名のマッチング ----

def normalize_zoning_name(name: str) -> str:
    """数字を漢数字に揃え、空白を除去する。例: "第１種" → "第一種"。"""
    return _WHITESPACE_RE.sub("", name.translate(_DIGIT_TO_KANJI))


def match_zoning_type(use_area_ja: str) -> ZoningCategory | None:
    """APIの `use_area_ja` を用途地域に対応付ける。該当なしは None。"""
    normalized = normalize_zoning_name(use_area_ja)
    if not normalized:
        return None

    # 完全一致
    for zoning in ZONING_TYPES:
        if normalize_zoning_name(zoning.name) == normalized:
            return zoning

    # 部分一致
    for zoning in ZONING_TYPES:
        z_norm = normalize_zoning_name(zoning.name)
        if z_norm in normalized or normalized in z_norm:
            return zoning

    # コード表（表記ゆれ）
    code = ZONING_NAME_TO_CODE.get(normalized)
    if code:
        return get_zoning_by_code(code)
    return None


# ---- 判定 ----

def external_map_url(lat: float, lon: float) -> str:
    return config.EXTERNAL_MAP_URL.format(lat=lat, lon=lon)


def _not_detected(map_url: str) -> ZoningLookupResult:
    return ZoningLookupResult(
        detected=False,
        zoning=None,
        raw_zoning_name=None,
        floor_area_ratio=None,
        building_coverage_ratio=None,
        external_map_url=map_url,
    )


def _attribute_text(props: dict, key: str) -> str | None:
    value = props.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value if isinstance(value, str) and value else None


def _result_from_feature(feature: dict, map_url: str) -> ZoningLookupResult:
    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}
    raw_name = props.get("use_area_ja")
    if not isinstance(raw_name, str) or not raw_name:
        if raw_name is not None:
            logger.info("用途地域名が文字列ではありません: %r", raw_name)
        raw_name = None
    zoning = match_zoning_type(raw_name) if raw_name else None
    if raw_name and zoning is None:
        logger.info("用途地域名を対応付けできません: %s", raw_name)
    return ZoningLookupResult(
        detected=zoning is not None,
        zoning=zoning,
        raw_zoning_name=raw_name,
        floor_area_ratio=_attribute_text(props, "u_floor_area_ratio_ja"),
        building_coverage_ratio=_attribute_text(props, "u_building_coverage_ratio_ja"),
        external_map_url=map_url,
    )


def _fetch_features(api_key: str, lat: float, lon: float) -> list[dict]:
    tile = lat_lon_to_tile(lat, lon, config.TILE_ZOOM)
    try:
        with ReinfolibClient(api_key) as client:
            return client.fetch_zoning_tile(tile)
    except requests.Timeout:
        logger.error("[reinfolib] タイムアウト: tile=%s", tile)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.error("[reinfolib] APIエラー: status=%s tile=%s", status, tile)
    except (requests.RequestException, ValueError) as e:
        logger.error("[reinfolib] 取得失敗: tile=%s %s", tile, e)
    return []


def resolve_zoning(lat: float, lon: float, api_key: str | None = None) -> ZoningLookupResult:
    """緯度経度から用途地域を判定する。例外は送出せず、常に結果を返す。"""
    map_url = external_map_url(lat, lon)

    if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90 or abs(lon) > 180:
        logger.warning("不正な座標: lat=%s lon=%s", lat, lon)
        return _not_detected(map_url)

    api_key = api_key or config.REINFOLIB_API_KEY
    if not api_key:
        logger.error("[reinfolib] REINFOLIB_API_KEY が設定されていません")
        return _not_detected(map_url)

    features = _fetch_features(api_key, lat, lon)
    if not features:
        logger.info("用途地域データなし: lat=%s lon=%s", lat, lon)
        return _not_detected(map_url)

    for feature in features:
        if point_in_feature(lon, lat, feature):
            return _result_from_feature(feature, map_url)

    # タイル境界でポリゴンが切られ、点が外輪からわずかに外れることがある
    logger.info("ポリゴン不一致のためタイル先頭のフィーチャーを採用: lat=%s lon=%s", lat, lon)
    return _result_from_feature(features[0], map_url)

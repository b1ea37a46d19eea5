"""ジオコーディング

Google Geocoding API のキーが設定されていればそれを使い、なければ
OpenStreetMap Nominatim を使う。Nominatim は詳細すぎる住所（部屋番号など）で
失敗するため、住所末尾を段階的に削りながら再試行する。

失敗は例外ではなく GeocodeFailure として返す。
"""

import logging
import math
import time

import requests

import config
from address_utils import clean_address, is_addressable, normalize_address, truncate_address
from models import GeocodeFailure, Position

logger = logging.getLogger(__name__)


class _UpstreamError(Exception):
    """上流サービスの通信・応答異常。"""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


# ---- HTTP ----

def _request_json(url: str, params: dict, headers: dict | None = None):
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=config.GEOCODE_TIMEOUT)
    except requests.Timeout as e:
        raise _UpstreamError(f"住所検索サーバーの応答がタイムアウトしました（{config.GEOCODE_TIMEOUT}秒）") from e
    except requests.ConnectionError as e:
        raise _UpstreamError("住所検索サーバーに接続できませんでした") from e
    except requests.RequestException as e:
        raise _UpstreamError(f"住所検索リクエストに失敗しました: {e}") from e

    if not resp.ok:
        raise _UpstreamError(f"住所検索サーバーがエラーを返しました: HTTP {resp.status_code}", resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise _UpstreamError("住所検索サーバーの応答を解析できませんでした") from e


def _parse_coordinates(lat_raw, lon_raw) -> tuple[float, float]:
    try:
        lat = float(lat_raw)
        lon = float(lon_raw)
    except (TypeError, ValueError) as e:
        raise _UpstreamError(f"座標を解析できませんでした: lat={lat_raw!r} lon={lon_raw!r}") from e
    if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90 or abs(lon) > 180:
        raise _UpstreamError(f"不正な座標が返されました: lat={lat} lon={lon}")
    return lat, lon


# ---- Google Geocoding API ----

def _google_request(params: dict, api_key: str) -> dict | None:
    """先頭の候補を返す。ZERO_RESULTS は None。"""
    data = _request_json(
        config.GOOGLE_GEOCODE_URL,
        params={**params, "key": api_key, "language": "ja", "region": "jp"},
    )
    if not isinstance(data, dict):
        raise _UpstreamError("Google Geocoding API の応答形式が不正です")

    status = data.get("status")
    if status == "ZERO_RESULTS":
        return None
    if status != "OK":
        raise _UpstreamError(f"Google Geocoding API エラー: {status}")

    results = data.get("results") or []
    if not isinstance(results, list):
        raise _UpstreamError("Google Geocoding API の応答形式が不正です")
    if not results:
        return None
    if not isinstance(results[0], dict):
        raise _UpstreamError("Google Geocoding API の応答形式が不正です")
    return results[0]


def _google_component(result: dict, *types: str) -> str:
    components = result.get("address_components") or []
    if not isinstance(components, list) or not all(isinstance(c, dict) for c in components):
        raise _UpstreamError("Google Geocoding API の address_components が不正です")
    for t in types:
        for comp in components:
            comp_types = comp.get("types")
            if isinstance(comp_types, list) and t in comp_types:
                return comp.get("long_name", "")
    return ""


def _position_from_google(
    result: dict, retry_count: int, normalized: str | None, attempted: tuple[str, ...] = (),
) -> Position:
    geometry = result.get("geometry") or {}
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(location, dict):
        raise _UpstreamError("Google Geocoding API の geometry が不正です")
    lat, lon = _parse_coordinates(location.get("lat"), location.get("lng"))
    return Position(
        lat=lat,
        lon=lon,
        display_name=result.get("formatted_address", ""),
        prefecture=_google_component(result, "administrative_area_level_1"),
        city=_google_component(result, "locality", "administrative_area_level_2"),
        location_type=geometry.get("location_type", ""),
        source="google",
        retry_count=retry_count,
        normalized_address=normalized,
        attempted_addresses=attempted,
    )


def _geocode_google(normalized: str, api_key: str) -> Position | GeocodeFailure:
    # Google は自前で曖昧一致するため切り詰めリトライは行わない
    attempted = (normalized,)
    try:
        result = _google_request({"address": normalized}, api_key)
        if result is None:
            logger.info("住所が見つかりません (google): %s", normalized)
            return GeocodeFailure(
                reason="not_found",
                message="住所が見つかりませんでした",
                attempted_addresses=attempted,
            )
        position = _position_from_google(result, 0, normalized, attempted)
    except _UpstreamError as e:
        logger.error("ジオコーディングエラー (google): %s", e.message)
        return GeocodeFailure(
            reason="upstream_error",
            message=e.message,
            status=e.status,
            attempted_addresses=attempted,
        )
    logger.info("ジオコーディング成功 (google): %s -> (%s, %s)", normalized, position.lat, position.lon)
    return position


# ---- Nominatim ----

def _nominatim_headers() -> dict:
    return {
        "User-Agent": config.NOMINATIM_USER_AGENT,
        "Accept-Language": "ja",
    }


def _nominatim_search(address: str) -> dict | None:
    """先頭の候補を返す。該当なしは None。"""
    data = _request_json(
        config.NOMINATIM_SEARCH_URL,
        params={
            "q": address,
            "format": "json",
            "addressdetails": 1,
            "limit": 1,
            "countrycodes": "jp",
        },
        headers=_nominatim_headers(),
    )
    if not isinstance(data, list):
        raise _UpstreamError("Nominatim の応答形式が不正です")
    if not data:
        return None
    if not isinstance(data[0], dict):
        raise _UpstreamError("Nominatim の応答形式が不正です")
    return data[0]


def _position_from_nominatim(
    item: dict, retry_count: int, normalized: str | None, attempted: tuple[str, ...] = (),
) -> Position:
    lat, lon = _parse_coordinates(item.get("lat"), item.get("lon"))
    addr = item.get("address") or {}
    if not isinstance(addr, dict):
        raise _UpstreamError("Nominatim の address が不正です")
    return Position(
        lat=lat,
        lon=lon,
        display_name=item.get("display_name", ""),
        prefecture=addr.get("state") or addr.get("province") or "",
        city=(
            addr.get("city") or addr.get("town") or addr.get("village")
            or addr.get("county") or ""
        ),
        location_type=item.get("type", ""),
        source="nominatim",
        retry_count=retry_count,
        normalized_address=normalized,
        attempted_addresses=attempted,
    )


def _geocode_nominatim(normalized: str) -> Position | GeocodeFailure:
    attempted: list[str] = []
    candidate = normalized

    while True:
        if attempted:
            time.sleep(config.GEOCODE_REQUEST_INTERVAL)
        attempted.append(candidate)
        retry_count = len(attempted) - 1

        try:
            item = _nominatim_search(candidate)
            if item is not None:
                position = _position_from_nominatim(
                    item, retry_count, normalized, tuple(attempted)
                )
                logger.info(
                    "ジオコーディング成功 (nominatim, retry=%d): %s -> (%s, %s)",
                    retry_count, candidate, position.lat, position.lon,
                )
                return position
        except _UpstreamError as e:
            logger.error("ジオコーディングエラー (nominatim): %s [%s]", e.message, candidate)
            return GeocodeFailure(
                reason="upstream_error",
                message=e.message,
                status=e.status,
                retry_count=retry_count,
                attempted_addresses=tuple(attempted),
            )

        if len(attempted) >= config.GEOCODE_MAX_ATTEMPTS:
            break
        shorter = truncate_address(candidate)
        if shorter == candidate or not is_addressable(shorter):
            break
        logger.debug("住所を切り詰めて再試行: %s -> %s", candidate, shorter)
        candidate = shorter

    logger.info("住所が見つかりません (nominatim): %s", attempted)
    return GeocodeFailure(
        reason="not_found",
        message="住所が見つかりませんでした",
        retry_count=len(attempted) - 1,
        attempted_addresses=tuple(attempted),
    )


# ---- 公開API ----

def geocode(address: str, api_key: str | None = None) -> Position | GeocodeFailure:
    """住所を緯度経度に変換する。"""
    cleaned = clean_address(address or "")
    if not cleaned:
        return GeocodeFailure(reason="invalid", message="住所を入力してください")

    normalized = normalize_address(cleaned)
    api_key = api_key or config.GOOGLE_MAPS_API_KEY
    if api_key:
        return _geocode_google(normalized, api_key)
    return _geocode_nominatim(normalized)


def reverse_geocode(lat: float, lon: float, api_key: str | None = None) -> Position | None:
    """緯度経度から住所を取得する。失敗時は None（理由は返さない）。"""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None

    api_key = api_key or config.GOOGLE_MAPS_API_KEY
    try:
        if api_key:
            result = _google_request({"latlng": f"{lat},{lon}"}, api_key)
            return _position_from_google(result, 0, None) if result else None

        data = _request_json(
            config.NOMINATIM_REVERSE_URL,
            params={"lat": lat, "lon": lon, "format": "json", "addressdetails": 1},
            headers=_nominatim_headers(),
        )
        if not isinstance(data, dict) or "error" in data:
            logger.info("逆ジオコーディング結果なし: (%s, %s)", lat, lon)
            return None
        return _position_from_nominatim(data, 0, None)
    except _UpstreamError as e:
        logger.error("逆ジオコーディングエラー: %s", e.message)
        return None

"""HTTPクライアント（不動産情報ライブラリAPI）"""

import logging

import requests

import config
from models import TileCoordinate

logger = logging.getLogger(__name__)


class ReinfolibClient:
    """不動産情報ライブラリAPI用HTTPクライアント。

    呼び出し側で必要なときに生成する。リトライは行わない。
    """

    def __init__(self, api_key: str | None = None):
        self._api_key = api_key or config.REINFOLIB_API_KEY
        if not self._api_key:
            raise ValueError(
                "APIキーが設定されていません。環境変数 REINFOLIB_API_KEY を設定してください。"
            )
        self._session = self._build_session()

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "Ocp-Apim-Subscription-Key": self._api_key,
        })
        return session

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ReinfolibClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get(self, endpoint: str, params: dict | None = None, timeout: float | None = None) -> dict:
        """JSON APIエンドポイントを呼び出す。"""
        url = f"{config.API_BASE_URL}/{endpoint}"
        logger.debug("GET %s params=%s", url, params)
        resp = self._session.get(url, params=params, timeout=timeout or config.ZONING_TIMEOUT)
        resp.raise_for_status()
        return resp.json()

    def get_geojson(self, endpoint: str, params: dict | None = None) -> dict:
        """GeoJSON APIエンドポイントを呼び出す。"""
        params = {"response_format": "geojson", **(params or {})}
        return self.get(endpoint, params)

    def fetch_zoning_tile(self, tile: TileCoordinate) -> list[dict]:
        """XKT002: 1タイル分の用途地域フィーチャーを取得。"""
        data = self.get_geojson(
            config.ZONING_ENDPOINT,
            params={"z": tile.z, "x": tile.x, "y": tile.y},
        )
        if not isinstance(data, dict):
            raise ValueError(f"GeoJSONではないレスポンス: {type(data).__name__}")
        features = data.get("features") or []
        return [f for f in features if isinstance(f, dict)]

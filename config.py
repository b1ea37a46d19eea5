"""定数・設定"""

import os
from dotenv import load_dotenv

load_dotenv()

# APIキー
GOOGLE_MAPS_API_KEY = os.environ.get("GOOGLE_MAPS_API_KEY", "")
REINFOLIB_API_KEY = os.environ.get("REINFOLIB_API_KEY", "")

# ---- ジオコーディング ----

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

# Nominatim 利用ポリシー: 連絡先を含む User-Agent が必須
NOMINATIM_USER_AGENT = os.environ.get(
    "NOMINATIM_USER_AGENT",
    "MinpakuZoneChecker/1.0 (https://github.com/ao-magicianED/minpaku-zone-checker)",
)

# 1リクエストあたりのタイムアウト (秒)
# requests の timeout は接続・各読み取りごとの上限で、応答全体の上限ではない
GEOCODE_TIMEOUT = 6

# 住所切り詰めリトライの最大試行回数
GEOCODE_MAX_ATTEMPTS = 5

# レート制限 (秒) Nominatim: 1 req/sec
GEOCODE_REQUEST_INTERVAL = 1.0

# ---- 用途地域 ----

# API基本URL
API_BASE_URL = "https://www.reinfolib.mlit.go.jp/ex-api/external"

# 都市計画決定GISデータ（用途地域）
ZONING_ENDPOINT = "XKT002"

# タイルzoom (XKT002)
TILE_ZOOM = 15

ZONING_TIMEOUT = 8

# 判定できなかった場合の外部用途地域マップ
EXTERNAL_MAP_URL = "https://cityzone.mapexpert.net/?ll={lat},{lon}&z=16"

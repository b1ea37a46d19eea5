"""民泊用途地域チェッカー: デバッグ用エントリーポイント

住所（または緯度経度）からジオコーディングと用途地域判定を行い、
結果をJSONで出力する。
"""

import argparse
import json
import logging
import sys
import time

import config
from geocoding import geocode, reverse_geocode
from zoning_data import get_status_label
from zoning_resolver import resolve_zoning

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="住所から用途地域と民泊可否を調べる")
    parser.add_argument("address", nargs="?", help="住所（例: 東京都新宿区歌舞伎町1-1）")
    parser.add_argument("--lat", type=float, help="緯度（住所の代わりに指定）")
    parser.add_argument("--lon", type=float, help="経度（住所の代わりに指定）")
    args = parser.parse_args(argv)
    if args.address is None and (args.lat is None or args.lon is None):
        parser.error("住所、または --lat と --lon を指定してください")
    return args


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if not config.REINFOLIB_API_KEY:
        logger.warning(
            "環境変数 REINFOLIB_API_KEY が設定されていません。用途地域は判定されません。\n"
            "APIキー申請先: https://www.reinfolib.mlit.go.jp/ex-api/api_apply.html"
        )

    started = time.monotonic()
    output: dict = {}

    if args.address is not None:
        position = geocode(args.address)
        output["geocode"] = position.to_dict()
        if not position.ok:
            print(json.dumps(output, ensure_ascii=False, indent=2))
            return 1
        lat, lon = position.lat, position.lon
    else:
        lat, lon = args.lat, args.lon
        position = reverse_geocode(lat, lon)
        output["geocode"] = position.to_dict() if position else None

    zoning = resolve_zoning(lat, lon)
    output["zoning"] = zoning.to_dict()
    if zoning.zoning:
        output["minpakuStatusLabel"] = get_status_label(zoning.zoning.minpaku_status)
    output["elapsedMs"] = round((time.monotonic() - started) * 1000)

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

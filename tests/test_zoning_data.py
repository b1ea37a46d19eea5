"""用途地域データのテスト"""

import pytest

from zoning_data import (
    ZONING_NAME_TO_CODE,
    ZONING_TYPES,
    get_status_color,
    get_status_label,
    get_zoning_by_code,
    get_zoning_by_name,
)


def test_thirteen_unique_categories():
    assert len(ZONING_TYPES) == 13
    assert len({z.code for z in ZONING_TYPES}) == 13
    assert len({z.name for z in ZONING_TYPES}) == 13


def test_statuses_are_known():
    for zoning in ZONING_TYPES:
        assert zoning.minpaku_status in ("allowed", "conditional", "restricted")
        assert zoning.ryokan_status in ("allowed", "conditional", "restricted")


def test_name_table_points_at_existing_codes():
    codes = {z.code for z in ZONING_TYPES}
    assert set(ZONING_NAME_TO_CODE.values()) <= codes
    for zoning in ZONING_TYPES:
        assert ZONING_NAME_TO_CODE[zoning.name] == zoning.code


def test_get_zoning_by_code():
    assert get_zoning_by_code("1SR").name == "第一種低層住居専用地域"
    assert get_zoning_by_code("KGS").minpaku_status == "restricted"
    assert get_zoning_by_code("XXX") is None


def test_get_zoning_by_name():
    assert get_zoning_by_name("準工業").code == "JKG"
    assert get_zoning_by_name("") is None
    assert get_zoning_by_name("市街化調整区域") is None


@pytest.mark.parametrize("status, label, color", [
    ("allowed", "✅ 原則OK", "#22c55e"),
    ("conditional", "⚠️ 条件付き", "#eab308"),
    ("restricted", "❌ 不可", "#ef4444"),
])
def test_status_label_and_color(status, label, color):
    assert get_status_label(status) == label
    assert get_status_color(status) == color


def test_to_dict_uses_camel_case():
    data = get_zoning_by_code("SYG").to_dict()
    assert data["code"] == "SYG"
    assert data["minpakuStatus"] == "allowed"
    assert "mainUse" in data

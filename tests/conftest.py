"""テスト共通設定"""

import pytest

import config


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """.env の内容に左右されないよう、APIキーを未設定にする"""
    monkeypatch.setattr(config, "GOOGLE_MAPS_API_KEY", "")
    monkeypatch.setattr(config, "REINFOLIB_API_KEY", "")

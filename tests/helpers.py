"""テスト用ヘルパー"""

from unittest.mock import Mock


def make_response(payload=None, status_code=200, json_error=False):
    """requests.Response の代用モック"""
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if json_error:
        resp.json.side_effect = ValueError("invalid json")
    else:
        resp.json.return_value = payload
    return resp

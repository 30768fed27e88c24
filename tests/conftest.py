from unittest.mock import MagicMock

import pytest
import requests


@pytest.fixture
def make_response():
    """Build a stand-in for a requests.Response."""

    def _make(text: str, status: int = 200, url: str = "http://test.invalid/") -> MagicMock:
        resp = MagicMock()
        resp.text = text
        resp.status_code = status
        resp.url = url
        if status >= 400:
            resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
        return resp

    return _make


@pytest.fixture
def make_script(tmp_path):
    """Write an executable shell script standing in for trec_eval."""

    def _make(body: str, name: str = "trec_eval"):
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(0o755)
        return path

    return _make

"""client 모듈의 모크 테스트."""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock, patch

import pytest
import requests

from lotte_inventory import client
from lotte_inventory.config import (
    BASE_URL,
    MAX_RETRIES,
    PRODUCT_SEARCH_PATH,
    REFERER,
    REQUEST_TIMEOUTS,
    STORE_LIST_PATH,
    USER_AGENTS,
)


def _response(text="<html></html>", encoding="utf-8"):
    resp = MagicMock()
    resp.text = text
    resp.encoding = encoding
    return resp


class TestBuildHeaders:
    """build_headers 의 테스트."""

    def test_browser_headers(self):
        headers = client.build_headers("mobile")

        assert headers["User-Agent"] == USER_AGENTS["mobile"]
        assert headers["Referer"] == REFERER
        assert headers["Accept-Language"].startswith("ko-KR")
        assert "Content-Type" not in headers

    def test_form_headers(self):
        headers = client.build_headers("pc", form=True)

        assert headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_unknown_device(self):
        assert client.build_headers("tv")["User-Agent"] == USER_AGENTS["pc"]


class TestRequestTimeout:
    """request_timeout 의 테스트."""

    def test_by_connection(self):
        assert client.request_timeout("fast") == REQUEST_TIMEOUTS["fast"]
        assert client.request_timeout("slow") == REQUEST_TIMEOUTS["slow"]

    def test_unknown_connection_uses_slow(self):
        assert client.request_timeout("dialup") == REQUEST_TIMEOUTS["slow"]


class TestGetSession:
    """get_session 의 테스트."""

    def setup_method(self):
        client.close_session()

    def teardown_method(self):
        client.close_session()

    def test_retry_policy(self):
        """5xx 만 재시도하고 GET·POST 모두 재시도 대상일 것."""
        session = client.get_session()
        retry = session.get_adapter("https://company.lottemart.com").max_retries

        assert retry.total == MAX_RETRIES
        assert set(retry.status_forcelist) == {500, 502, 503, 504}
        assert {"GET", "POST"} <= set(retry.allowed_methods)
        assert retry.backoff_factor > 0

    def test_shared(self):
        assert client.get_session() is client.get_session()


class TestFetchStoreList:
    """fetch_store_list 의 테스트."""

    @patch("lotte_inventory.client.get_session")
    def test_request(self, mock_session):
        session = MagicMock()
        mock_session.return_value = session
        session.get.return_value = _response("<option>")

        assert client.fetch_store_list("서울") == "<option>"

        args, kwargs = session.get.call_args
        assert args[0] == BASE_URL + STORE_LIST_PATH
        assert kwargs["params"] == {"p_area": "서울", "p_type": "1"}
        assert kwargs["headers"]["Referer"] == REFERER
        assert kwargs["timeout"] > 0

    @patch("lotte_inventory.client.get_session")
    def test_http_error(self, mock_session):
        session = MagicMock()
        mock_session.return_value = session
        resp = _response()
        resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        session.get.return_value = resp

        with pytest.raises(requests.HTTPError):
            client.fetch_store_list("서울")

    @patch("lotte_inventory.client.get_session")
    def test_guess_encoding(self, mock_session):
        """charset 없는 응답은 본문으로 인코딩을 추정할 것."""
        session = MagicMock()
        mock_session.return_value = session
        resp = _response(encoding="ISO-8859-1")
        resp.apparent_encoding = "EUC-KR"
        session.get.return_value = resp

        client.fetch_store_list("서울")
        assert resp.encoding == "EUC-KR"


class TestFetchProductSearch:
    """fetch_product_search 의 테스트."""

    @patch("lotte_inventory.client.get_session")
    def test_request(self, mock_session):
        session = MagicMock()
        mock_session.return_value = session
        session.post.return_value = _response("<li>")

        assert client.fetch_product_search("경기", "405", "레고") == "<li>"

        args, kwargs = session.post.call_args
        assert args[0] == BASE_URL + PRODUCT_SEARCH_PATH
        assert kwargs["data"] == {"p_area": "경기", "p_market": "405", "p_schWord": "레고"}
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    @patch("lotte_inventory.client.get_session")
    def test_timeout(self, mock_session):
        session = MagicMock()
        mock_session.return_value = session
        session.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(requests.Timeout):
            client.fetch_product_search("경기", "405", "레고")


class _StatusHandler(BaseHTTPRequestHandler):
    """statuses 의 상태 코드를 순서대로 돌려주고 요청 수를 센다."""

    statuses: list[int] = []
    calls = 0

    def _reply(self):
        cls = type(self)
        status = cls.statuses[min(cls.calls, len(cls.statuses) - 1)]
        cls.calls += 1
        body = "<option value=\"326\">토이저러스 제타플렉스</option>".encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        self._reply()

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        self._reply()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def upstream(monkeypatch):
    """재시도 동작 확인용 로컬 HTTP 서버."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    monkeypatch.setenv("no_proxy", "127.0.0.1")
    _StatusHandler.statuses = [200]
    _StatusHandler.calls = 0
    server = ThreadingHTTPServer(("127.0.0.1", 0), _StatusHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    client.close_session()
    base_url = f"http://127.0.0.1:{server.server_address[1]}"
    with patch("lotte_inventory.client.BASE_URL", base_url), \
            patch("lotte_inventory.client.BACKOFF_FACTOR", 0):
        yield _StatusHandler
    client.close_session()
    server.shutdown()
    server.server_close()


class TestRetryBehavior:
    """세션 재시도 정책의 실제 동작 테스트."""

    def test_server_error_retried(self, upstream):
        """5xx 뒤에 성공하면 재시도해서 본문을 받을 것."""
        upstream.statuses = [503, 502, 200]

        html = client.fetch_store_list("서울")

        assert "토이저러스" in html
        assert upstream.calls == 3

    def test_server_error_exhausted(self, upstream):
        upstream.statuses = [500]

        with pytest.raises(requests.HTTPError):
            client.fetch_product_search("서울", "326", "레고")
        assert upstream.calls == MAX_RETRIES + 1

    def test_client_error_not_retried(self, upstream):
        """4xx 는 재시도하지 않을 것."""
        upstream.statuses = [404, 200]

        with pytest.raises(requests.HTTPError):
            client.fetch_store_list("서울")
        assert upstream.calls == 1

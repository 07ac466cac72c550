"""롯데마트 모바일 엔드포인트 HTTP 클라이언트.

- 매장 목록: GET  {BASE_URL}/inc/asp/search_market_list.asp
- 상품 검색: POST {BASE_URL}/product/search_product.asp (form-encoded)

재시도는 세션에 마운트한 urllib3 Retry 가 담당한다.
5xx·연결 오류만 지수 백오프로 재시도하고 4xx 는 재시도하지 않는다.
실패는 requests.RequestException 으로 호출자에게 전달된다.
"""

from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from lotte_inventory.config import (
    BACKOFF_FACTOR,
    BASE_URL,
    CONNECTION,
    DEVICE,
    MAX_RETRIES,
    PRODUCT_SEARCH_PATH,
    REFERER,
    REQUEST_TIMEOUTS,
    RETRY_STATUS_CODES,
    STORE_LIST_PATH,
    USER_AGENTS,
)

logger = logging.getLogger(__name__)

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """재시도 정책이 설정된 공유 세션을 반환한다."""
    global _session
    if _session is None:
        retry = Retry(
            total=MAX_RETRIES,
            connect=MAX_RETRIES,
            read=MAX_RETRIES,
            status=MAX_RETRIES,
            backoff_factor=BACKOFF_FACTOR,
            status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=frozenset(["GET", "POST"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session = requests.Session()
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        _session = session
    return _session


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
        _session = None


def build_headers(device: str = DEVICE, form: bool = False) -> dict[str, str]:
    """브라우저와 같은 요청 헤더를 만든다.

    Args:
        device: "pc" or "mobile"
        form: True 면 form-encoded POST 용 Content-Type 을 붙인다
    """
    headers = {
        "User-Agent": USER_AGENTS.get(device, USER_AGENTS["pc"]),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8",
        "Referer": REFERER,
    }
    if form:
        headers["Content-Type"] = "application/x-www-form-urlencoded"
    return headers


def request_timeout(connection: str = CONNECTION) -> float:
    """연결 품질("fast" / "slow")에 맞는 타임아웃(초)."""
    return REQUEST_TIMEOUTS.get(connection, REQUEST_TIMEOUTS["slow"])


def fetch_store_list(region: str) -> str:
    """지역의 매장 목록 HTML 을 가져온다.

    Raises:
        requests.RequestException: 네트워크 오류·타임아웃·비정상 응답
    """
    resp = get_session().get(
        BASE_URL + STORE_LIST_PATH,
        params={"p_area": region, "p_type": "1"},
        headers=build_headers(),
        timeout=request_timeout(),
    )
    resp.raise_for_status()
    _fix_encoding(resp)
    _preview(resp.text, f"매장 목록 {region}")
    return resp.text


def fetch_product_search(region: str, store_code: str, keyword: str) -> str:
    """매장에서 키워드로 상품을 검색한 결과 HTML 을 가져온다.

    Raises:
        requests.RequestException: 네트워크 오류·타임아웃·비정상 응답
    """
    resp = get_session().post(
        BASE_URL + PRODUCT_SEARCH_PATH,
        data={"p_area": region, "p_market": store_code, "p_schWord": keyword},
        headers=build_headers(form=True),
        timeout=request_timeout(),
    )
    resp.raise_for_status()
    _fix_encoding(resp)
    _preview(resp.text, f"상품 검색 {region}/{store_code}")
    return resp.text


def _fix_encoding(resp: requests.Response) -> None:
    """charset 이 없는 응답은 ISO-8859-1 로 해석되므로 본문으로 추정한다 (EUC-KR 등)."""
    if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = resp.apparent_encoding


def _preview(html: str, label: str) -> None:
    """디버그 레벨에서 응답 HTML 앞부분만 남긴다."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("=== HTML 응답 (%s) ===\n%s", label, html[:500])

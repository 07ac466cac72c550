"""롯데마트 모바일 응답 HTML 파싱 모듈.

매장 목록 (search_market_list.asp):
  1. <option value="코드">매장명</option> 정규식 추출 (주전략)
  2. BeautifulSoup 의 option 태그 탐색 (폴백)

상품 목록 (search_product.asp):
  1. <li> 블록 단위로 분리, prod-name 이 없는 블록은 상품이 아님
  2. layer_wrap 영역에서 재고·가격·제조사·규격 추출 (주전략)
  3. layer_wrap 을 못 찾으면 <li> 블록 전체에서 추출 (폴백)

어떤 경우에도 예외를 호출자에게 전파하지 않는다. 실패한 항목은 로그만 남기고
건너뛰며, 그때까지 모은 결과를 반환한다.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from itertools import islice

from bs4 import BeautifulSoup

from lotte_inventory.config import (
    CHAIN_BRAND,
    DEFAULT_SIZE,
    MAX_HTML_LENGTH,
    MAX_LAYER_LENGTH,
    MAX_LIST_ITEMS,
    STORE_PLACEHOLDER,
    TARGET_BRANDS,
)
from lotte_inventory.directory import lookup
from lotte_inventory.manufacturers import extract_manufacturer
from lotte_inventory.models import Product, Store

logger = logging.getLogger(__name__)

_OPTION_PATTERN = re.compile(
    r'<option\s+value="([^"]+)"[^>]*>([^<]+)</option>', re.IGNORECASE
)
# 다음 <li 또는 </li> 에서 끊는다. 닫히지 않은 <li> 가 많아도 스캔은 선형
_LIST_ITEM_PATTERN = re.compile(
    r"<li\b[^>]*>((?:(?!<li\b|</li>).)*)", re.IGNORECASE | re.DOTALL
)
_PRODUCT_NAME_PATTERN = re.compile(
    r'<div[^>]*class="[^"]*\bprod-name\b[^"]*"[^>]*>([^<]+)</div>', re.IGNORECASE
)
_LAYER_WRAP_PATTERN = re.compile(
    r'<div[^>]*class="[^"]*\blayer_wrap\b[^"]*"[^>]*>'
    rf"(.{{0,{MAX_LAYER_LENGTH}}}?)(?:</div>\s*){{2,}}",
    re.IGNORECASE | re.DOTALL,
)
_BRANCH_SUFFIX_PATTERN = re.compile(r"점$")
_FIRST_NUMBER_PATTERN = re.compile(r"\d+")
_LEADING_NUMBER_PATTERN = re.compile(r"^\d+")
_PRICE_NOISE_PATTERN = re.compile(r"[,원\s]")

SOLD_OUT = "품절"


def _field_patterns(label: str, max_length: int | None = None) -> tuple[re.Pattern, ...]:
    """라벨 하나에 대한 추출 패턴을 구체적인 것부터 순서대로 만든다.

    <th>ㆍ라벨 : </th><td>값</td> → <th>라벨 : </th><td>값</td> → 라벨 : 값
    """
    tail = "[^<\\n]*" if max_length is None else f"[^<\\n]{{0,{max_length - 1}}}"
    return (
        re.compile(rf"<th[^>]*>\s*ㆍ{label}\s*:\s*</th>\s*<td[^>]*>([^<]+)</td>", re.IGNORECASE),
        re.compile(rf"<th[^>]*>\s*{label}\s*:\s*</th>\s*<td[^>]*>([^<]+)</td>", re.IGNORECASE),
        re.compile(rf"{label}\s*:\s*([^<\s]{tail})", re.IGNORECASE),
    )


_STOCK_PATTERNS = _field_patterns("재고")
_PRICE_PATTERNS = _field_patterns("가격")
_MANUFACTURER_PATTERNS = _field_patterns("제조사", max_length=100)
_SIZE_PATTERNS = _field_patterns("규격", max_length=50)


# ---------------------------------------------------------------------------
# 매장 목록
# ---------------------------------------------------------------------------


def normalize_store_name(original_name: str, store_code: str) -> str:
    """스크랩한 매장명을 공식 매장명으로 변환한다.

    우선순위:
      1. 매장 코드가 테이블에 있으면 테이블의 이름
      2. 토이저러스·그랑그로서리 표기가 이미 있으면 그대로
      3. 끝의 "점" 을 떼고 "롯데마트" 를 붙인다 (이미 있으면 그대로)
    """
    known = lookup(store_code)
    if known:
        return known

    if any(brand in original_name for brand in TARGET_BRANDS):
        return original_name

    normalized = _BRANCH_SUFFIX_PATTERN.sub("", original_name).strip()
    if CHAIN_BRAND not in normalized:
        normalized = f"{normalized} {CHAIN_BRAND}"
    return normalized


def parse_store_list(html: str, region: str) -> list[Store]:
    """매장 선택 option 목록 HTML 에서 매장 리스트를 추출한다.

    Args:
        html: search_market_list.asp 응답 HTML
        region: 조회한 지역

    Returns:
        Store 리스트 (문서 순서). 파싱 실패 시 빈 리스트.
    """
    try:
        options = _options_from_regex(html)
        if not options:
            options = _options_from_soup(html)

        stores: list[Store] = []
        for code, label in options:
            code = code.strip()
            label = label.strip()
            if not code or not label or label == STORE_PLACEHOLDER:
                continue
            stores.append(Store(
                code=code,
                name=normalize_store_name(label, code),
                region=region,
            ))
        return stores
    except Exception:
        logger.exception("매장 목록 HTML 파싱 오류: region=%s", region)
        return []


def _options_from_regex(html: str) -> list[tuple[str, str]]:
    return [
        (m.group(1), html_lib.unescape(m.group(2)))
        for m in _OPTION_PATTERN.finditer(html)
    ]


def _options_from_soup(html: str) -> list[tuple[str, str]]:
    """따옴표가 없거나 태그가 깨진 option 목록용 폴백."""
    soup = BeautifulSoup(html, "html.parser")
    options = []
    for option in soup.find_all("option"):
        value = option.get("value")
        if value is None:
            continue
        options.append((value, option.get_text()))
    return options


# ---------------------------------------------------------------------------
# 상품 목록
# ---------------------------------------------------------------------------


def parse_product_list(
    html: str, region: str, store_code: str, store_name: str
) -> list[Product]:
    """상품 검색 결과 HTML 에서 상품 리스트를 추출한다.

    Args:
        html: search_product.asp 응답 HTML
        region: 지역
        store_code: 매장 코드
        store_name: 매장명 (공식 명칭으로 변환된 것)

    Returns:
        Product 리스트 (문서 순서). 실패 시 그때까지 추출한 상품.
    """
    products: list[Product] = []
    store = Store(code=store_code, name=store_name, region=region)

    try:
        if len(html) > MAX_HTML_LENGTH:
            logger.warning(
                "HTML 크기가 너무 큽니다: %d 자. 앞 %d 자만 파싱합니다.",
                len(html), MAX_HTML_LENGTH,
            )
            html = html[:MAX_HTML_LENGTH]

        blocks = [m.group(1) for m in islice(_LIST_ITEM_PATTERN.finditer(html), MAX_LIST_ITEMS)]

        for block in blocks:
            try:
                product = _parse_list_item(block, store)
            except Exception as e:
                logger.warning("개별 상품 파싱 실패: store=%s, error=%s", store_code, e)
                continue
            if product is not None:
                products.append(product)
    except Exception:
        logger.exception("상품 목록 HTML 파싱 오류: region=%s, store=%s", region, store_code)

    logger.debug("총 %d 개 상품 파싱 완료: %s %s", len(products), region, store_name)
    return products


def _parse_list_item(block: str, store: Store) -> Product | None:
    """<li> 블록 하나를 Product 로 변환한다. 상품 블록이 아니면 None."""
    name_match = _PRODUCT_NAME_PATTERN.search(block)
    if not name_match:
        return None
    name = html_lib.unescape(name_match.group(1)).strip()
    if not name:
        return None

    layer = _extract_layer(block)

    stock = 0
    stock_text = _first_match(_STOCK_PATTERNS, layer)
    if stock_text is not None:
        stock = _parse_stock(stock_text)

    price = 0
    price_text = _first_match(_PRICE_PATTERNS, layer)
    if price_text is not None:
        price = _parse_price(price_text)

    manufacturer = _first_match(_MANUFACTURER_PATTERNS, layer)
    if not manufacturer:
        manufacturer = extract_manufacturer(name)

    size = _first_match(_SIZE_PATTERNS, layer)
    if size is None:
        size = DEFAULT_SIZE

    logger.debug("파싱 결과: %s - 재고: %d개, 가격: %d원, 제조사: %s", name, stock, price, manufacturer)
    return Product(
        name=name,
        size=size,
        manufacturer=manufacturer,
        price=price,
        stock=stock,
        store=store,
    )


def _extract_layer(block: str) -> str:
    """상세 레이어(layer_wrap) 영역을 잘라낸다. 없으면 블록 전체를 쓴다."""
    match = _LAYER_WRAP_PATTERN.search(block)
    if match:
        return match.group(1)
    logger.debug("layer_wrap 매칭 실패, <li> 전체에서 검색")
    return block[:MAX_LAYER_LENGTH]


def _first_match(patterns: tuple[re.Pattern, ...], text: str) -> str | None:
    """처음으로 매칭된 패턴의 캡처 값을 반환한다."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return html_lib.unescape(match.group(1)).strip()
    return None


def _parse_stock(text: str) -> int:
    """"80 개" → 80, "품절" → 0."""
    if SOLD_OUT in text:
        return 0
    match = _FIRST_NUMBER_PATTERN.search(text)
    return int(match.group()) if match else 0


def _parse_price(text: str) -> int:
    """"14,000 원" → 14000. 해석할 수 없거나 0 이하면 0."""
    digits = _PRICE_NOISE_PATTERN.sub("", text)
    match = _LEADING_NUMBER_PATTERN.match(digits)
    if not match:
        return 0
    price = int(match.group())
    return price if price > 0 else 0

"""전 지역·전 매장 상품 검색 오케스트레이션.

처리 흐름:
  1. 지역별 매장 목록 조회 → 토이저러스·그랑그로서리 매장만 남김
  2. 매장을 BATCH_SIZE 개씩 묶어 병렬 검색, 배치 사이에는 BATCH_DELAY 대기
  3. 매장별 결과는 StoreOutcome 으로 받아 성공한 것만 모음
  4. 지역 사이에는 REGION_DELAY 대기

한 매장·한 지역의 실패는 로그만 남기고 나머지 검색을 계속한다.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from lotte_inventory import directory
from lotte_inventory.aggregator import group_products_by_region
from lotte_inventory.client import fetch_product_search, fetch_store_list
from lotte_inventory.config import (
    BATCH_DELAY,
    BATCH_SIZE,
    REGION_DELAY,
    REGIONS,
    TARGET_BRANDS,
    TARGET_REGIONS,
)
from lotte_inventory.models import Product, RegionGroup, Store, StoreOutcome
from lotte_inventory.parser import parse_product_list, parse_store_list

logger = logging.getLogger(__name__)


def fetch_stores_by_region(region: str) -> list[Store]:
    """지역의 매장 목록을 가져온다. 네트워크 오류는 호출자에게 전파된다."""
    html = fetch_store_list(region)
    stores = parse_store_list(html, region)
    logger.info("%s 지역 매장 %d 개 발견", region, len(stores))
    return stores


def is_target_store(store: Store) -> bool:
    """조회 대상 브랜드(토이저러스·그랑그로서리) 매장인지."""
    return any(brand in store.name for brand in TARGET_BRANDS)


def search_products_in_store(
    region: str, store_code: str, keyword: str, store_name: str | None = None
) -> list[Product]:
    """매장 한 곳에서 상품을 검색한다.

    Args:
        region: 지역
        store_code: 매장 코드
        keyword: 검색어
        store_name: 매장명. 생략하면 매장 코드 테이블에서 찾는다.

    Raises:
        requests.RequestException: 검색 요청 실패
    """
    if store_name is None:
        store_name = directory.store_name(region, store_code)

    html = fetch_product_search(region, store_code, keyword)
    products = parse_product_list(html, region, store_code, store_name)

    if products:
        logger.info('%s %s 에서 "%s" 검색 결과: %d 개', region, store_name, keyword, len(products))
    else:
        logger.warning('상품 검색 결과 없음: %s %s "%s"', region, store_name, keyword)
    return products


def _search_store(store: Store, keyword: str) -> StoreOutcome:
    """매장 검색 결과를 StoreOutcome 으로 감싼다. 예외를 밖으로 던지지 않는다."""
    try:
        products = search_products_in_store(store.region, store.code, keyword, store.name)
    except Exception as e:
        logger.error("상품 검색 실패 (%s - %s): %s", store.region, store.code, e)
        return StoreOutcome(store=store, error=str(e))
    return StoreOutcome(store=store, products=products)


def _search_region(region: str, keyword: str) -> list[Product]:
    stores = [s for s in fetch_stores_by_region(region) if is_target_store(s)]
    logger.info("%s 지역 대상 매장 %d 개 검색", region, len(stores))

    products: list[Product] = []
    failed = 0
    with ThreadPoolExecutor(max_workers=BATCH_SIZE) as executor:
        for start in range(0, len(stores), BATCH_SIZE):
            batch = stores[start:start + BATCH_SIZE]
            outcomes = list(executor.map(lambda s: _search_store(s, keyword), batch))

            # 배치가 모두 끝난 뒤에 합친다
            for outcome in outcomes:
                if outcome.ok:
                    products.extend(outcome.products)
                else:
                    failed += 1

            if start + BATCH_SIZE < len(stores):
                _pause(BATCH_DELAY)

    if failed:
        logger.warning("%s 지역: %d / %d 개 매장 검색 실패", region, failed, len(stores))
    return products


def search_all_stores(keyword: str, regions: list[str] | None = None) -> list[Product]:
    """모든 대상 지역·매장에서 상품을 검색해 평탄한 리스트로 반환한다.

    Args:
        keyword: 검색어. 비어 있으면 요청 없이 빈 리스트.
        regions: 검색할 지역. 생략하면 서울·경기·인천.
    """
    if not keyword or not keyword.strip():
        return []
    keyword = keyword.strip()

    if regions is None:
        regions = TARGET_REGIONS

    start_time = time.time()
    all_products: list[Product] = []

    for region in regions:
        if region not in REGIONS:
            logger.warning("알 수 없는 지역입니다. 건너뜁니다: %s", region)
            continue

        logger.info("%s 지역 매장들 검색 중...", region)
        try:
            all_products.extend(_search_region(region, keyword))
        except Exception as e:
            logger.error("%s 지역 검색 중 오류: %s", region, e)

        _pause(REGION_DELAY)

    logger.info(
        '"%s" 검색 완료: 상품 %d 개, 소요 시간 %.1f 초',
        keyword, len(all_products), time.time() - start_time,
    )
    return all_products


def search(keyword: str, regions: list[str] | None = None) -> list[RegionGroup]:
    """검색 후 지역·매장별로 묶고 재고순으로 정렬한 결과를 반환한다."""
    return group_products_by_region(search_all_stores(keyword, regions))


def _pause(seconds: float) -> None:
    if seconds > 0:
        time.sleep(seconds)

"""롯데마트 재고 조회 — 메인 엔트리포인트.

처리 흐름:
  1. 서울·경기·인천의 토이저러스·그랑그로서리 매장 목록 조회
  2. 각 매장에서 검색어로 상품 검색
  3. 지역 → 매장별로 묶고 재고순 정렬
  4. 결과 출력
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from lotte_inventory.aggregator import summarize
from lotte_inventory.client import close_session
from lotte_inventory.config import LOG_DIR, REGIONS, TARGET_REGIONS
from lotte_inventory.models import RegionGroup
from lotte_inventory.search import search

EXIT_OK = 0
EXIT_NO_RESULTS = 1
EXIT_BAD_INPUT = 2


def setup_logging(level: int = logging.INFO) -> None:
    """로깅 초기 설정."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"inventory_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def format_results(groups: list[RegionGroup], keyword: str) -> str:
    """집계 결과를 사람이 읽을 텍스트로 만든다."""
    counts = summarize(groups)
    lines = [
        f'"{keyword}" 검색 결과: 지역 {counts["regions"]} / 매장 {counts["stores"]} / '
        f'상품 {counts["products"]} (재고 있음 {counts["available"]})',
    ]
    for group in groups:
        lines.append("")
        lines.append(f"[{group.region}] ({len(group.stores)}개 매장)")
        for store in group.stores:
            lines.append(
                f"  {store.store_name} "
                f"({store.available_count}/{store.total_count}개 상품 재고 있음)"
            )
            for i, p in enumerate(store.products, start=1):
                stock = f"{p.stock}개" if p.stock > 0 else "품절"
                price = f" {p.price:,}원" if p.price > 0 else ""
                lines.append(
                    f"    {i}. {p.name} · {p.size} · {p.manufacturer}{price} → 재고 {stock}"
                )
    return "\n".join(lines)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lotte-inventory",
        description="롯데마트 토이저러스·그랑그로서리 매장 재고 조회",
    )
    parser.add_argument("keyword", nargs="*", help="검색어")
    parser.add_argument(
        "--region", "-r", action="append", choices=REGIONS, dest="regions",
        help=f"검색할 지역 (여러 번 지정 가능, 기본: {' '.join(TARGET_REGIONS)})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="디버그 로그 출력")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    """메인 처리. 종료 코드를 반환한다."""
    args = _parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger(__name__)

    keyword = " ".join(args.keyword).strip()
    if not keyword:
        print("검색어를 입력해주세요", file=sys.stderr)
        return EXIT_BAD_INPUT

    logger.info("=== 재고 조회 시작: %s ===", keyword)
    try:
        groups = search(keyword, args.regions)
    finally:
        close_session()

    if not groups:
        print("재고가 있는 상품을 찾을 수 없습니다", file=sys.stderr)
        return EXIT_NO_RESULTS

    print(format_results(groups, keyword))
    logger.info("=== 재고 조회 완료 ===")
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

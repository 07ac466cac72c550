"""데이터 모델 정의."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Store:
    """롯데마트 매장 1곳."""

    code: str  # 매장 코드 (예: 326)
    name: str  # 표시용 매장명 (예: 토이저러스 제타플렉스)
    region: str  # 지역 (예: 서울)


@dataclass
class Product:
    """매장 검색 결과의 상품 1건."""

    name: str
    size: str
    manufacturer: str
    price: int  # 원, 0 = 정보 없음
    stock: int  # 개, 0 = 품절
    store: Store


@dataclass
class StoreResult:
    """매장별 집계 결과."""

    store_name: str
    products: list[Product]  # 재고순 정렬
    available_count: int  # 재고 있는 상품 수
    total_count: int  # 전체 상품 수


@dataclass
class RegionGroup:
    """지역별 집계 결과."""

    region: str
    stores: list[StoreResult] = field(default_factory=list)


@dataclass
class StoreOutcome:
    """매장 1곳의 검색 시도 결과. 성공이면 products, 실패면 error."""

    store: Store
    products: list[Product] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

"""검색 결과 집계 — 지역·매장별 그룹화와 재고순 정렬."""

from __future__ import annotations

from lotte_inventory.models import Product, RegionGroup, StoreResult


def stock_sort_key(product: Product) -> tuple[bool, int]:
    """품절 상품은 뒤로, 나머지는 재고 많은 순.

    동률은 정의하지 않는다. sorted() 가 안정 정렬이므로 입력 순서가 유지된다.
    """
    return (product.stock == 0, -product.stock)


def group_products_by_region(products: list[Product]) -> list[RegionGroup]:
    """상품 리스트를 지역 → 매장명 순으로 묶는다.

    지역·매장 순서는 처음 등장한 순서를 따른다. 상품이 없는 매장과
    매장이 없는 지역은 결과에서 빠진다. 입력 리스트는 변경하지 않는다.
    """
    region_map: dict[str, dict[str, list[Product]]] = {}
    for product in products:
        store_map = region_map.setdefault(product.store.region, {})
        store_map.setdefault(product.store.name, []).append(product)

    groups: list[RegionGroup] = []
    for region, store_map in region_map.items():
        stores: list[StoreResult] = []
        for store_name, store_products in store_map.items():
            sorted_products = sorted(store_products, key=stock_sort_key)
            result = StoreResult(
                store_name=store_name,
                products=sorted_products,
                available_count=sum(1 for p in sorted_products if p.stock > 0),
                total_count=len(sorted_products),
            )
            if result.total_count > 0:
                stores.append(result)
        if stores:
            groups.append(RegionGroup(region=region, stores=stores))

    return groups


def summarize(groups: list[RegionGroup]) -> dict[str, int]:
    """지역·매장·상품 수와 재고 있는 상품 수를 센다."""
    return {
        "regions": len(groups),
        "stores": sum(len(g.stores) for g in groups),
        "products": sum(s.total_count for g in groups for s in g.stores),
        "available": sum(s.available_count for g in groups for s in g.stores),
    }

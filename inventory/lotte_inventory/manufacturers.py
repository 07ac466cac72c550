"""상품명 기반 제조사 추정."""

from lotte_inventory.config import UNKNOWN_MANUFACTURER

# 우선순위 순서. 다른 이름을 포함하는 이름이 먼저 와야 한다 (반다이남코코리아 > 반다이)
MANUFACTURERS = (
    "반다이남코코리아", "반다이", "남코", "타카라토미", "토미",
    "레고", "굿스마일컴퍼니", "맥팔레인", "플레이메이트", "젝스토이즈",
    "피그마", "넨도로이드", "코토부키야", "메디코스", "바르미에",
    "오뚜기", "농심", "서울우유", "매일유업", "남양유업",
    "롯데", "오리온", "크라운", "삼양", "동원",
)


def extract_manufacturer(product_name: str) -> str:
    """상품명에 포함된 첫 번째 제조사명을 반환한다. 없으면 "기타"."""
    for manufacturer in MANUFACTURERS:
        if manufacturer in product_name:
            return manufacturer
    return UNKNOWN_MANUFACTURER

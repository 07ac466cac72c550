"""롯데마트 모바일 매장 재고 조회."""

__version__ = "0.1.0"

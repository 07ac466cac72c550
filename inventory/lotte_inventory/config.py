"""설정 모듈 — 환경변수·상수 정의."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# .env 는 실행 디렉터리에서부터 상위로 찾는다
load_dotenv(find_dotenv(usecwd=True))

# --- 롯데마트 모바일 (mobiledowa) ---
# 브라우저 환경에서는 same-origin 릴레이 경로로 교체해서 사용한다
BASE_URL: str = os.environ.get(
    "LOTTE_BASE_URL", "https://company.lottemart.com/mobiledowa"
).rstrip("/")
STORE_LIST_PATH = "/inc/asp/search_market_list.asp"
PRODUCT_SEARCH_PATH = "/product/search_product.asp"
REFERER = "https://company.lottemart.com/mobiledowa/"

# --- User-Agent ---
PC_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/139.0.0.0 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 14; SM-S921N) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/139.0.0.0 Mobile Safari/537.36"
)

USER_AGENTS = {
    "pc": PC_USER_AGENT,
    "mobile": MOBILE_USER_AGENT,
}
DEVICE: str = os.environ.get("LOTTE_DEVICE", "pc")

# --- 요청 설정 ---
# 연결 품질별 타임아웃 (초)
REQUEST_TIMEOUTS = {
    "fast": float(os.environ.get("LOTTE_REQUEST_TIMEOUT_FAST", "15")),
    "slow": float(os.environ.get("LOTTE_REQUEST_TIMEOUT_SLOW", "30")),
}
CONNECTION: str = os.environ.get("LOTTE_CONNECTION", "fast")
MAX_RETRIES = int(os.environ.get("LOTTE_MAX_RETRIES", "2"))
BACKOFF_FACTOR = float(os.environ.get("LOTTE_BACKOFF_FACTOR", "0.5"))
RETRY_STATUS_CODES = (500, 502, 503, 504)

# --- 검색 페이싱 ---
BATCH_SIZE = int(os.environ.get("LOTTE_BATCH_SIZE", "3"))
BATCH_DELAY = float(os.environ.get("LOTTE_BATCH_DELAY", "0.3"))  # 초
REGION_DELAY = float(os.environ.get("LOTTE_REGION_DELAY", "0.1"))  # 초

# --- 지역 ---
REGIONS = [
    "서울", "경기", "인천", "강원", "충북", "충남", "대전", "경북",
    "경남", "대구", "부산", "울산", "전북", "전남", "광주", "제주",
]
TARGET_REGIONS = ["서울", "경기", "인천"]

# --- 매장 브랜드 ---
TARGET_BRANDS = ["토이저러스", "그랑그로서리"]
CHAIN_BRAND = "롯데마트"
STORE_PLACEHOLDER = "매장선택"

# --- 파싱 한도 ---
MAX_HTML_LENGTH = 1_000_000
MAX_LIST_ITEMS = 100
MAX_LAYER_LENGTH = 10_000

# --- 상품 기본값 ---
DEFAULT_SIZE = "15세이상"
UNKNOWN_MANUFACTURER = "기타"

# --- 로그 ---
# 실행 디렉터리 기준. 디렉터리는 setup_logging 에서 만든다
LOG_DIR = Path(os.environ.get("LOTTE_LOG_DIR", "logs"))

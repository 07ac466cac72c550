"""매장 코드 → 공식 매장명 테이블.

실제 API 응답으로 확인된 매장 코드만 등록한다.
목록 파서·상품 검색 모두 이 테이블 하나를 참조한다.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

STORE_DIRECTORY: dict[str, str] = {
    # 서울
    "326": "토이저러스 제타플렉스",
    "344": "토이저러스 양평점",
    "342": "그랑그로서리 은평점",
    "343": "토이저러스 은평점",
    "339": "토이저러스 중계점",
    "302": "제타플렉스 잠실점",
    "301": "강변점",
    "335": "금천점",
    "441": "김포공항점",
    "316": "삼양점",
    "200": "제타플렉스 서울역점",
    "340": "서초점",
    "322": "송파점",
    "328": "양평점",
    "334": "월드타워점",
    "307": "중계점",
    "312": "청량리점",
    "323": "행당역점",
    "303": "천호점",
    # 경기
    "405": "그랑그로서리 구리점",
    "448": "토이저러스 롯데몰수지점",
    "416": "토이저러스 광명점",
    "489": "토이저러스 광교점",
    "492": "토이저러스 이천점",
    "496": "토이저러스 기흥점",
    "497": "토이저러스 파주점",
    "473": "경기양평점",
    "455": "고양점",
    "463": "광교점",
    "458": "권선점",
    "479": "김포한강점",
    "457": "덕소점",
    "435": "동두천점",
    "446": "롯데몰수지점",
    "453": "마석점",
    "464": "상록점",
    "475": "선부점",
    "462": "수원점",
    "456": "시화점",
    "476": "시흥배곧점",
    "459": "시흥점",
    "468": "신갈점",
    "415": "안산점",
    "417": "안성점",
    "410": "오산점",
    "409": "의왕점",
    "422": "이천점",
    "430": "장암점",
    "403": "주엽점",
    "411": "천천점",
    "471": "판교점",
    "408": "화정점",
    # 인천
    "433": "검단점",
    "469": "계양점",
    "404": "부평역점",
    "426": "부평점",
    "418": "삼산점",
    "465": "송도점",
    "406": "연수점",
    "461": "청라점",
}


def lookup(store_code: str) -> str | None:
    """등록된 공식 매장명을 반환한다. 미등록 코드는 None."""
    return STORE_DIRECTORY.get(store_code)


def store_name(region: str, store_code: str) -> str:
    """매장 코드로 매장명을 조회한다.

    미등록 코드는 "<지역> 지역 매장 (코드: <코드>)" 형태로 합성하고
    테이블 보강이 필요하다는 경고를 남긴다.
    """
    name = lookup(store_code)
    if name:
        return name

    logger.warning("매장 코드 %s 에 대한 매장명을 찾을 수 없습니다. 지역: %s", store_code, region)
    return f"{region} 지역 매장 (코드: {store_code})"

"""
Offline question bank for clients whose request for generated questions
failed or returned "not generated yet".

Selection is a pure function of ``(date_seed, category)``: everyone who
falls back on the same day sees the same questions in the same order.
"""

from collections.abc import Callable

from balance_game.entities import QuestionPair

# Numerical Recipes LCG constants
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


def _pairs(*options: tuple[str, str]) -> list[QuestionPair]:
    return [QuestionPair(option1=a, option2=b) for a, b in options]


FALLBACK_QUESTIONS: dict[str, list[QuestionPair]] = {
    "daily": _pairs(
        ("평생 라면 금지", "평생 치킨 금지"),
        ("핸드폰 배터리 20%로 하루 버티기", "와이파이 1칸으로 하루 버티기"),
        ("매일 1시간 일찍 출근", "매일 1시간 늦게 퇴근"),
        ("1년 동안 커피 금지", "1년 동안 야식 금지"),
        ("방 온도 10도에서 살기", "방 온도 30도에서 살기"),
        ("평생 게임 금지", "평생 술자리 금지"),
        ("일주일 침대 없음", "일주일 샤워 없음"),
        ("핸드폰 카메라 사라짐", "핸드폰 스피커 사라짐"),
        ("오후 3시 갑자기 잠들기", "새벽 3시 갑자기 깸"),
        ("평생 단 음료만", "평생 탄산음료만"),
        ("평생 아침형 인간", "평생 야행성"),
        ("친구와 1주일 여행", "혼자 1주일 여행"),
        ("평생 교통비 무료", "평생 외식비 30% 할인"),
        ("하루 1시간 텔레포트", "하루 1시간 투명화"),
        ("평생 에어컨 없이", "평생 히터 없이"),
        ("평생 배달음식 금지", "평생 편의점 음식만"),
        ("하루 3시간만 자고 활기차게", "하루 12시간 자야만 깸"),
        ("매일 아침 6시 기상", "매일 새벽 2시 취침"),
        ("평생 짠 음식만", "평생 단 음식만"),
        ("일주일 말 못하기", "일주일 듣지 못하기"),
    ),
    "ideal-male": _pairs(
        ("키 185cm 평범한 얼굴", "키 170cm 잘생긴 얼굴"),
        ("운동 잘하는 남자", "요리 잘하는 남자"),
        ("말 많은 외향적", "말 적은 내향적"),
        ("연봉 1억 무뚝뚝", "연봉 4천만 다정함"),
        ("유머 감각 최고", "책임감 최고"),
        ("패션 센스 좋음", "운전 실력 좋음"),
        ("가족 중시", "친구 중시"),
        ("애교 많음", "카리스마 많음"),
        ("매일 연락하는", "적당히 연락하는"),
        ("게임 좋아함", "운동 좋아함"),
        ("직장인", "프리랜서"),
        ("계획적인", "즉흥적인"),
        ("부모님 살갑게", "부모님 독립적"),
        ("사진 잘 찍어줌", "길 잘 찾음"),
        ("대기업 다님", "스타트업 다님"),
        ("술 잘 마심", "술 안 마심"),
        ("강아지 좋아함", "고양이 좋아함"),
        ("노래 잘함", "춤 잘 춤"),
        ("아침형", "저녁형"),
        ("로맨틱함", "현실적임"),
    ),
    "ideal-female": _pairs(
        ("키 165cm 예쁜 얼굴", "키 170cm 평범한 얼굴"),
        ("요리 잘하는", "청소 잘하는"),
        ("명랑한 성격", "차분한 성격"),
        ("연봉 8천만 바쁨", "연봉 3천만 여유"),
        ("애교 많음", "쿨함"),
        ("패션 센스 좋음", "화장 잘함"),
        ("집순이", "밖순이"),
        ("사진 잘 나옴", "사진 잘 찍음"),
        ("매일 통화", "적당히 통화"),
        ("드라마 좋아함", "영화 좋아함"),
        ("귀여운 스타일", "섹시한 스타일"),
        ("계획적인", "즉흥적인"),
        ("독서 좋아함", "운동 좋아함"),
        ("요리사", "디자이너"),
        ("단발머리", "긴 생머리"),
        ("술 좋아함", "커피 좋아함"),
        ("강아지 키움", "고양이 키움"),
        ("노래방 좋아함", "카페 좋아함"),
        ("아침형", "저녁형"),
        ("감성적", "이성적"),
    ),
    "school": _pairs(
        ("중간고사 0점", "기말고사 0점"),
        ("1교시 지각 10번", "조퇴 10번"),
        ("체육 1등급", "음악 1등급"),
        ("선생님한테 혼남", "친구들 앞에서 망신"),
        ("급식 맛없음", "급식 양 적음"),
        ("학교 1km 걸어감", "버스 30분 서서감"),
        ("발표 많은 수업", "시험 많은 수업"),
        ("반장", "부반장"),
        ("수학 만점", "영어 만점"),
        ("체육대회 금메달", "축제 인기상"),
        ("학원 매일 10시까지", "독학 매일 12시까지"),
        ("조별과제 혼자 다 함", "조별발표 혼자 다 함"),
        ("친한 친구 3명", "아는 친구 30명"),
        ("쉬는시간 10분", "점심시간 30분"),
        ("교복 입고 등교", "사복 입고 등교"),
        ("1학기 선생님 좋음", "2학기 선생님 좋음"),
        ("수업 중 졸다 걸림", "수업 중 핸드폰 걸림"),
        ("야자 필수", "아침 일찍 등교 필수"),
        ("학교 근처 살기", "학교 멀리 살기"),
        ("시험 전날 벼락치기", "매일 조금씩 공부"),
    ),
    "work": _pairs(
        ("연봉 5천 야근 없음", "연봉 8천 야근 많음"),
        ("상사 좋음 동료 별로", "상사 별로 동료 좋음"),
        ("재택근무 매일", "출근 주 2회"),
        ("회의 많음", "보고서 많음"),
        ("점심 1시간", "퇴근 30분 일찍"),
        ("통근 30분 대중교통", "통근 1시간 차"),
        ("회식 월 1회 필수", "야유회 년 1회 필수"),
        ("대기업 말단", "중소기업 팀장"),
        ("일 재미없음 연봉 높음", "일 재미있음 연봉 낮음"),
        ("프로젝트형 업무", "루틴형 업무"),
        ("개인 책상", "자유 좌석"),
        ("복지 좋음 승진 느림", "복지 별로 승진 빠름"),
        ("야근 수당 많음", "칼퇴 가능"),
        ("점심 회사식당", "점심 식대 지급"),
        ("여름휴가 1주", "겨울휴가 1주"),
        ("업무 단순 반복", "업무 복잡 다양"),
        ("사수 엄격함", "사수 자유방임"),
        ("옷 자유", "복장 규정 있음"),
        ("스톡옵션 있음", "성과급 많음"),
        ("9 to 6", "10 to 7"),
    ),
    "hobby": _pairs(
        ("좋아하는 아이돌 만나기", "콘서트 평생 무료"),
        ("굿즈 무제한 구매", "앨범 무제한 구매"),
        ("팬싸 당첨 100%", "콘서트 표 100% 구매"),
        ("최애 인스타 팔로우", "최애 유튜브 알림"),
        ("덕질 친구 많음", "덕질 혼자 조용히"),
        ("컴백 년 4회", "컴백 년 2회 퀄리티 높음"),
        ("포카 올컴", "포스터 올컴"),
        ("팬카페 운영진", "팬카페 회원"),
        ("최애 드라마 출연", "최애 예능 출연"),
        ("최애 생일 축하 받음", "최애에게 선물 전달"),
        ("오프라인 굿즈샵", "온라인 굿즈샵"),
        ("최애 같은 동네 살기", "최애 해외 활동 많음"),
        ("최애 SNS 자주 업데이트", "최애 브이로그 자주"),
        ("팬미팅 자주", "콘서트 자주"),
        ("최애 솔로 활동", "최애 그룹 활동"),
        ("최애 패션 따라하기", "최애 취미 따라하기"),
        ("최애 굿즈 방 가득", "최애 사진 방 가득"),
        ("팬덤 활동 활발", "팬덤 활동 조용히"),
        ("최애 라디오 DJ", "최애 MC"),
        ("덕질 비용 무제한", "덕질 시간 무제한"),
    ),
    "ability": _pairs(
        ("하루 1시간 텔레포트", "하루 1시간 투명화"),
        ("미래 1주일 보기", "과거로 1주일 돌아가기"),
        ("동물과 대화", "식물과 대화"),
        ("하늘 날기", "물속 숨쉬기"),
        ("마음 읽기", "기억 조작"),
        ("불 조종", "물 조종"),
        ("시간 정지 5분", "시간 되돌리기 5분"),
        ("순간이동 10회", "분신술 10회"),
        ("변신 능력", "크기 조절 능력"),
        ("투시 능력", "예지 능력"),
        ("죽지 않음", "아프지 않음"),
        ("모든 언어 구사", "모든 악기 연주"),
        ("광속 이동", "순간 학습"),
        ("날씨 조종", "중력 조종"),
        ("기억력 완벽", "체력 무한"),
        ("밤에 활동력 10배", "낮에 활동력 10배"),
        ("모든 음식 요리", "모든 음식 맛 느끼기"),
        ("잠 안 자도 됨", "먹지 않아도 됨"),
        ("모든 악기 마스터", "모든 운동 마스터"),
        ("꿈 조종", "감정 조종"),
    ),
    "mahjong": _pairs(
        ("리치 걸면 누군가 후로", "리치 걸면 100% 쯔모 못함"),
        ("드림 역만 한 번 성공", "평생 3판 이상 화료"),
        ("동4국 1등 그러나 배패 망함", "동4국 꼴지 그러나 배패 최고급"),
        ("멘젠 유지 그러나 대기 약함", "후로 하지만 대기 강함"),
        ("탕야오 빠르게", "혼일색 천천히"),
        ("내 패는 최강이지만 상대도 최강", "내 패는 평범한데 상대도 평범"),
        ("쯔모는 잘 되지만 론을 못함", "론은 잘 되지만 쯔모를 못함"),
        ("도라 8장 대기패 1장", "대기패 8장 도라 0장"),
        ("리치 일발 쯔모.. 끝", "리치 이후 10순 버티고 만관 이상 화료"),
        ("패산에서 도라패가 어디 있는지 보임", "상대 손패를 50% 예지 능력"),
        ("양면대기4장", "샤보대기4장"),
        ("흐름은 좋은데 점수는 적음", "점수는 큰데 흐름은 나쁨"),
        ("도라 3개 들고 시작 그러나 패 형태 망함", "도라 0개 그러나 형태 최상"),
        ("전국치또이협회", "전국또이또이협회"),
        ("오프마작 리치 시 초능력으로 리치BGM 흘러나옴", "화료는 잘 되지만 연출 없음"),
        ("4등을 절대 안 하는 안정형", "역만 한 번 터트리는 도박형"),
    ),
}

DEFAULT_FALLBACK_CATEGORY = "daily"


def seed_from_string(text: str) -> int:
    """Derive a 32-bit seed from a string (Java-style string hash)."""
    seed = 0
    for char in text:
        seed = (seed * 31 + ord(char)) % _LCG_MODULUS
    return seed


def seeded_random(seed: str) -> Callable[[], float]:
    """Linear congruential generator yielding floats in [0, 1)."""
    state = seed_from_string(seed)

    def next_value() -> float:
        nonlocal state
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return state / _LCG_MODULUS

    return next_value


def select_fallback(date_seed: str, category: str, count: int) -> list[QuestionPair]:
    """Pick the day's offline questions for a category.

    Unknown categories use the daily-life bank. The bank is shuffled with
    a generator seeded from ``"{date_seed}_{category}"`` (Fisher-Yates) and
    the first ``count`` pairs are returned; fewer if the bank is smaller.

    Args:
        date_seed: Calendar day identifier
        category: Category identifier
        count: Number of pairs wanted

    Returns:
        The selected pairs
    """
    bank = list(FALLBACK_QUESTIONS.get(category) or FALLBACK_QUESTIONS[DEFAULT_FALLBACK_CATEGORY])
    rand = seeded_random(f"{date_seed}_{category}")
    for i in range(len(bank) - 1, 0, -1):
        j = int(rand() * (i + 1))
        bank[i], bank[j] = bank[j], bank[i]
    return bank[:count]

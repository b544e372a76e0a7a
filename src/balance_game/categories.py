"""Quiz categories known to the bulk pre-generation job."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    """A quiz topic.

    Attributes:
        id: Identifier used in cache keys and API requests
        name: Display name
        description: Topic text embedded in the generation prompt
    """

    id: str
    name: str
    description: str


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("daily", "일상생활", "일상생활 (음식, 수면, 생활 습관, 편의 등)"),
    Category("ideal-male", "이상형-남자", "남자 이상형 (외모, 성격, 능력, 스타일 등)"),
    Category("ideal-female", "이상형-여자", "여자 이상형 (외모, 성격, 능력, 스타일 등)"),
    Category("school", "학교생활", "학교생활 (수업, 친구, 동아리, 시험 등)"),
    Category("work", "회사생활", "회사생활 (업무, 동료, 회식, 직장 문화 등)"),
    Category("hobby", "덕질생활", "덕질생활 (아이돌, 콘텐츠, 굿즈, 팬덤 등)"),
    Category("mahjong", "리치마작", "리치마작 (좋아하는 역, 타패 전략, 게임 상황 등)"),
    Category("ability", "능력/초능력", "능력/초능력 (텔레포트, 투명화, 시간조작, 마법 등)"),
    Category("relationship", "연애/관계", "연애/관계 (연애 스타일, 데이트, 애정표현 등)"),
    Category("money", "돈/재테크", "돈/재테크 (투자, 저축, 소비, 재무 목표 등)"),
    Category("travel", "여행/레저", "여행/레저 (여행지, 숙소, 활동, 휴가 등)"),
    Category("game", "게임/엔터", "게임/엔터테인먼트 (게임 장르, 영화, 드라마, 유튜브 등)"),
)


def get_category(category_id: str) -> Category | None:
    """Look up a default category by identifier."""
    for category in DEFAULT_CATEGORIES:
        if category.id == category_id:
            return category
    return None

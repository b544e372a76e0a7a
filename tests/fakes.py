"""In-memory fakes and sample data shared by the tests."""

from balance_game.entities import GenerationRequest, QuestionPair
from balance_game.exceptions import CacheUnavailableError
from balance_game.repositories import InMemoryQuestionRepository

NOUNS = [
    "커피", "라면", "여행", "영화", "게임", "음악", "운동", "독서",
    "치킨", "피자", "수영", "등산", "낚시", "요리", "노래", "그림",
]


def valid_pair(index: int) -> QuestionPair:
    """A pair that passes every default validation rule."""
    noun = NOUNS[index % len(NOUNS)]
    return QuestionPair(
        option1=f"{noun} 평생 무제한으로 즐기기",
        option2=f"{noun} 평생 한번도 못하기",
    )


def valid_pairs(count: int) -> list[QuestionPair]:
    return [valid_pair(i) for i in range(count)]


def english_pair(index: int) -> QuestionPair:
    """A complete pair rejected for its untranslated English word."""
    return QuestionPair(
        option1=f"Netflix {NOUNS[index % len(NOUNS)]} 평생 보기",
        option2=f"Youtube {NOUNS[index % len(NOUNS)]} 평생 보기",
    )


class FakeGenerator:
    """In-memory QuestionGenerator returning canned candidates."""

    def __init__(self, candidates=None, error: Exception | None = None, model_name: str = "fake-model"):
        self.candidates = candidates if candidates is not None else valid_pairs(12)
        self.error = error
        self.calls: list[GenerationRequest] = []
        self._model_name = model_name

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate(self, request: GenerationRequest) -> list[QuestionPair]:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return list(self.candidates)

    async def is_available(self) -> bool:
        return True


class BrokenStore(InMemoryQuestionRepository):
    """Store whose reads and/or writes fail like an unreachable backend."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, date_seed, category):
        if self.fail_reads:
            raise CacheUnavailableError("store offline")
        return super().get(date_seed, category)

    def set(self, date_seed, category, questions, metadata=None):
        if self.fail_writes:
            raise CacheUnavailableError("store offline")
        return super().set(date_seed, category, questions, metadata)

    def health_check(self) -> bool:
        return False



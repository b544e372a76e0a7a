"""Prompt and response schema for balance game generation.

The prompt is Korean because the validator requires Hangul-dominated
options; asking in the target language keeps the rejection rate low.
"""

from typing import Any

PROMPT_TEMPLATE = """당신은 창의적이고 재미있는 밸런스 게임 질문을 만드는 한국어 전문가입니다.

주제: {category_description}
날짜 시드: {date_seed}

반드시 지켜야 할 규칙:

1. 질문 개수: 정확히 {question_count}개를 생성하세요.

2. 언어: 순수한 한국어만 사용하세요. 영어 단어, 한자, 일본어를 쓰지 말고 선택지에 설명이나 부연설명을 넣지 마세요.

3. 선택지 길이: 각 선택지는 {min_len}자 이상 {max_len}자 이하로 간결하게 유지하세요.

4. **밸런스 (매우 중요!)**: 두 선택지는 반드시 비슷한 수준의 trade-off를 가져야 합니다. 명백히 좋은 선택지나 나쁜 선택지를 만들지 마세요.

5. Trade-off 구조: 각 선택지는 "장점 + 단점" 또는 "서로 다른 가치" 구조여야 합니다.

6. 두 선택지가 숫자만 다르거나 서로 같으면 안 됩니다.

**option1, option2 필드를 가진 객체의 JSON 배열로만 출력하세요. 다른 설명이나 텍스트를 포함하지 마세요.**"""


def build_prompt(
    category_description: str,
    date_seed: str,
    question_count: int,
    min_len: int,
    max_len: int,
) -> str:
    """Render the generation prompt.

    Args:
        category_description: Topic of the questions
        date_seed: Calendar day, varies the output from day to day
        question_count: Number of pairs to request
        min_len: Minimum characters per option
        max_len: Maximum characters per option (slightly under the
            validator's bound so near-misses still pass)

    Returns:
        The prompt text
    """
    return PROMPT_TEMPLATE.format(
        category_description=category_description,
        date_seed=date_seed,
        question_count=question_count,
        min_len=min_len,
        max_len=max_len,
    )


def build_response_schema(question_count: int, min_len: int, max_len: int) -> dict[str, Any]:
    """Structured output schema: an array of ``{option1, option2}`` objects."""
    option_description = f"{{label}} 선택지 ({min_len}~{max_len}자, 한국어)"
    return {
        "type": "ARRAY",
        "description": f"{question_count}개의 밸런스 게임 질문 목록",
        "items": {
            "type": "OBJECT",
            "properties": {
                "option1": {
                    "type": "STRING",
                    "description": option_description.format(label="밸런스 게임의 첫 번째"),
                },
                "option2": {
                    "type": "STRING",
                    "description": option_description.format(label="밸런스 게임의 두 번째"),
                },
            },
            "required": ["option1", "option2"],
        },
    }

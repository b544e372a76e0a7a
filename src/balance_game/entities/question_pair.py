"""Question pair domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class QuestionPair:
    """Domain entity for one balance game question.

    Attributes:
        option1: The first choice
        option2: The second, competing choice
    """

    option1: str
    option2: str

    @classmethod
    def from_raw(cls, raw: Any) -> "QuestionPair":
        """Build a pair from one element of the model's JSON array.

        Non-object elements and non-string options become empty strings,
        leaving the rejection to the validator.
        """
        if not isinstance(raw, dict):
            return cls(option1="", option2="")
        option1 = raw.get("option1")
        option2 = raw.get("option2")
        return cls(
            option1=option1 if isinstance(option1, str) else "",
            option2=option2 if isinstance(option2, str) else "",
        )

    @property
    def is_complete(self) -> bool:
        """Whether both options carry text after trimming."""
        return bool(self.option1.strip()) and bool(self.option2.strip())

    def trimmed(self) -> "QuestionPair":
        """Return a copy with surrounding whitespace removed from both options."""
        return QuestionPair(option1=self.option1.strip(), option2=self.option2.strip())

    def to_dict(self) -> dict[str, str]:
        return {"option1": self.option1, "option2": self.option2}

"""Domain policies for the philosophy flashcard endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from gemini_proxy.constants import PHILOSOPHY_CARD_TYPES

Language = Literal["he", "en"]


@dataclass(frozen=True)
class DomainPolicy:
    """What distinguishes one philosophy domain from another.

    The text fields are keyed by language. A missing example or instruction
    falls back to no text rather than to the other language; the expertise
    falls back to Hebrew.
    """

    name: str
    expertise: dict[str, str]
    example: dict[str, str] = field(default_factory=dict)
    additional_instructions: dict[str, str] = field(default_factory=dict)
    card_types: tuple[str, ...] | None = PHILOSOPHY_CARD_TYPES
    strict: bool = True

    def expertise_for(self, language: Language) -> str:
        """Return the expertise phrase, falling back to Hebrew."""
        return self.expertise.get(language) or self.expertise["he"]

    def example_for(self, language: Language) -> str | None:
        """Return the worked example card for ``language``, if any."""
        return self.example.get(language)

    def additional_instructions_for(self, language: Language) -> str | None:
        """Return domain-specific instructions for ``language``, if any."""
        return self.additional_instructions.get(language)


_HOBBES_EXAMPLE = """
דוגמה ליישום:
אם הפסקה עוסקת ב"המצב הטבעי" של הובס, כרטיס יכול להיראות כך:
{
  "type": "Argument",
  "front": "מדוע, לפי הובס, \\"המצב הטבעי\\" הוא בהכרח מצב של מלחמה (Bellum omnium contra omnes)?",
  "back": "בשל השילוב בין שוויון ביכולת להרוג, מחסור במשאבים, והיעדר ריבון מוסכם המטיל מורא.",
  "context_logic": "היעדר סמכות מרכזית מוביל לכך שכל אדם פועל לפי 'הזכות לטבע' לשימור עצמי, מה שיוצר חוסר ביטחון תמידי.",
  "tags": ["Argument", "הובס", "לויתן", "מצב הטבע", "מלחמת הכל בכל"]
}
""".strip()

_CATEGORICAL_IMPERATIVE_EXAMPLE = """
דוגמה ליישום:
אם הפסקה עוסקת ב"אימפרטיב קטגורי", כרטיס יכול להיראות כך:
{
  "type": "Concept",
  "front": "מהו האימפרטיב הקטגורי לפי קאנט?",
  "back": "ציווי מוחלט המחייב פעולה מתוך חובה, ללא תלות בנטיות או תוצאות - \\"פעל רק על פי מקסימה שתוכל גם לרצות שתהפוך לחוק כללי\\".",
  "context_logic": "האימפרטיב הקטגורי הוא עקרון היסוד של המוסר הקאנטיאני, המבוסס על אוטונומיה של התבונה ולא על השלכות.",
  "tags": ["Concept", "קאנט", "הנחות יסוד", "אימפרטיב קטגורי"]
}
""".strip()

_KANT_INSTRUCTIONS = """
הנחיות ספציפיות לקאנט:
- השתמש במונחים המקוריים: "אימפרטיב קטגורי", "תבונה מעשית", "אוטונומיה", "סינתזה א-פריורית", "תבונה טהורה"
- הדגש את הלוגיקה הטרנסצנדנטלית והארגומנטציה המושגית
- הבחן בין נטיות (Neigungen) לבין חובה (Pflicht)
- חבר רעיונות לתורת הקריטיקות (ביקורת התבונה הטהורה/המעשית/כוח השיפוט)
- שים לב להבחנות מרכזיות: תופעה/דבר-בעצמו, א-פריורי/א-פוסטריורי, אנליטי/סינתטי
- הדגש את מרכזיות האוטונומיה והחופש בפילוסופיה המוסרית
""".strip()

POLITICAL_PHILOSOPHY = DomainPolicy(
    name="political",
    expertise={"he": "פילוסופיה פוליטית", "en": "political philosophy"},
    example={"he": _HOBBES_EXAMPLE},
)

KANT = DomainPolicy(
    name="kant",
    expertise={
        "he": "הפילוסופיה של קאנט והאידאליזם הטרנסצנדנטלי",
        "en": "Kantian philosophy and transcendental idealism",
    },
    example={"he": _CATEGORICAL_IMPERATIVE_EXAMPLE},
    additional_instructions={"he": _KANT_INSTRUCTIONS},
)

POLICIES: dict[str, DomainPolicy] = {p.name: p for p in (POLITICAL_PHILOSOPHY, KANT)}

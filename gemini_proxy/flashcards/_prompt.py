"""Prompt templates for flashcard generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gemini_proxy.flashcards.domains import DomainPolicy, Language

# --- Generic flashcards ---

GENERIC_DEEP_MODE = """

⚠️ DEEP ANALYSIS MODE:
- Provide comprehensive analysis of the content
- Create flashcards for every significant aspect, nuance, and context
- Look for primary concepts, secondary ideas, examples, implications, and subtle distinctions
- A typical passage should generate 3-6 flashcards in this mode
- Don't hesitate to create many flashcards - thorough coverage is desired
"""

GENERIC_STANDARD_MODE = """

⚠️ STANDARD MODE:
- Identify the 1-2 main ideas in the content
- Create one flashcard if the content focuses on a single concept
- Create 2 flashcards if the content contains two distinct ideas or aspects
- Don't force multiple flashcards if the content addresses only one idea
"""

INSTRUCTION_SEPARATOR = "\n\n---\n\n"

# --- Philosophy flashcards ---

SYSTEM_INSTRUCTION_EN = """
You are an expert in {expertise} and knowledgeable in Anki learning methodology. Your task is to analyze paragraphs from academic texts and create high-quality flashcards (Anki-style).

Working rules:
1. Atomicity: Each flashcard should address only one idea.
2. Active phrasing: Use questions like 'Why', 'How', 'What is the difference', not just 'Who'.
3. Academic precision: Don't simplify concepts in a way that damages their original meaning.
4. Context: Ensure the answer includes the philosopher's rationale.
5. English: All content should be in English.

Card types:
- Concept: A central concept or definition
- Argument: A thesis or justification
- Context: Historical or philosophical context
- Contrast: A comparison or opposition between ideas

Return response in JSON format only with this structure:
{{
  "flashcards": [
    {{
      "type": "Argument",
      "front": "Why does [thinker] argue that [specific question from text]?",
      "back": "[Concise answer including the rationale]",
      "context_logic": "[Explanation of the internal logic and connection to the thinker's theory]",
      "tags": ["Argument", "[Thinker name]", "[Work name]", "key concept"]
    }}
  ]
}}
""".strip()

SYSTEM_INSTRUCTION_HE = """
אתה מומחה ל{expertise} ומומחה למתודולוגיית הלמידה Anki. תפקידך לנתח פסקאות מתוך טקסטים אקדמיים וליצור מהם כרטיסי זיכרון (Flashcards) איכותיים.

חוקי עבודה:
1. אטומיות: כל כרטיס יעסוק ברעיון אחד בלבד.
2. ניסוח אקטיבי: השתמש בשאלות 'למה', 'איך' ו'מה ההבדל', ולא רק ב'מי'.
3. דיוק אקדמי: אל תפשט את המושגים באופן שפוגע במשמעות המקורית.
4. הקשר: ודא שהתשובה כוללת את הרציונל של ההוגה.
5. עברית: כל התוכן צריך להיות בעברית.

סוגי כרטיסים (type):
- Concept: מושג מרכזי או הגדרה
- Argument: טיעון או הנמקה
- Context: הקשר היסטורי או פילוסופי
- Contrast: השוואה או ניגוד בין רעיונות

עבור כל רעיון מרכזי בפסקה, צור כרטיס שכולל:
- type: אחד מהסוגים (Concept/Argument/Context/Contrast)
- front: השאלה (ניסוח אקטיבי ומעורר חשיבה)
- back: התשובה (תמציתית אך מלאה, כולל הרציונל)
- context_logic: הסבר נוסף על הלוגיקה הפנימית והקשר לתורת ההוגה
- tags: מערך של תגיות רלוונטיות (כולל את סוג הכרטיס, שם ההוגה, שם היצירה, ומושגי מפתח)

החזר תשובה בפורמט JSON בלבד עם המבנה הבא:
{{
  "flashcards": [
    {{
      "type": "Argument",
      "front": "מדוע, לפי [שם ההוגה], [שאלה ספציפית מהטקסט]?",
      "back": "[תשובה תמציתית הכוללת את הרציונל]",
      "context_logic": "[הסבר על הלוגיקה הפנימית]",
      "tags": ["Argument", "[שם ההוגה]", "[שם היצירה]", "מושג מפתח"]
    }}
  ]
}}{example}

הנחיות כלליות:
- ודא שכל כרטיס עומד בפני עצמו ומובן ללא הפסקה המקורית
- השתמש במונחים המקוריים של ההוגה כשרלוונטי
- אל תכלול כל הסבר נוסף או טקסט מחוץ לפורמט JSON
- אל תוסיף סימני קוד (```) או כל עיצוב markdown אחר
- החזר JSON נקי לחלוטין
""".strip()

PHILOSOPHY_DEEP_MODE_EN = """
⚠️ DEEP ANALYSIS MODE:
- Create comprehensive analysis of the passage
- Generate flashcards for every aspect, nuance and context
- Look for primary concepts, secondary ideas, examples, implications
- A typical passage should generate 3-6 flashcards in this mode
"""

PHILOSOPHY_STANDARD_MODE_EN = """
⚠️ STANDARD MODE:
- Identify the 1-2 main ideas in the passage
- Create one flashcard if focused on a single concept
- Create 2 flashcards if the passage contains two distinct ideas
"""

PHILOSOPHY_DEEP_MODE_HE = """
⚠️ חשוב מאוד - מצב ניתוח מעמיק (Extra Cards Mode):
- נדרש ניתוח מעמיק ויסודי של הפסקה
- צור כרטיסים עבור כל היבט, ניואנס והקשר בפסקה
- חפש רעיונות משניים, השלכות, דוגמאות והבחנות עדינות
- פסקה טיפוסית תייצר 3-6 כרטיסים במצב זה
- אל תחשוש ליצור כרטיסים רבים - זה המצב שבו אנחנו רוצים כיסוי מקיף
- כל פרט פילוסופי משמעותי ראוי לכרטיס נפרד
- היבטים שכדאי לחפש:
  * מושגים ראשיים ומשניים
  * טיעונים והנמקות
  * דוגמאות ואנלוגיות
  * הבחנות והשוואות
  * הקשרים היסטוריים ופילוסופיים
  * השלכות ומסקנות
  * ניואנסים מושגיים
"""

PHILOSOPHY_STANDARD_MODE_HE = """
⚠️ חשוב מאוד - כמות כרטיסים:
- בדרך כלל, פסקה מכילה 1-2 רעיונות מרכזיים
- צור כרטיס אחד אם הפסקה מתמקדת ברעיון בודד
- צור 2 כרטיסים אם הפסקה מכילה שני רעיונות נפרדים או היבטים שונים של אותו נושא
- אל תכפה יצירת כרטיסים מרובים אם הפסקה באמת עוסקת ברעיון אחד
"""

PHILOSOPHY_DEEP_GUIDELINES_HE = """
הנחיות נוספות (מצב מעמיק):
- חפש כל פרט פילוסופי משמעותי ויצור עבורו כרטיס
- פסקה עשירה יכולה לייצר 4-6 כרטיסים או יותר
- כלול כרטיסים על הקשרים, דוגמאות והשלכות
"""

PHILOSOPHY_STANDARD_GUIDELINES_HE = """
הנחיות נוספות:
- צור כרטיס אחד אם הפסקה מתמקדת ברעיון מרכזי אחד
- צור 2 כרטיסים אם הפסקה מכילה שני רעיונות נפרדים או שני היבטים משמעותיים
"""


def build_generic_message(
    content: str,
    system_instruction: str,
    metadata: Mapping[str, str] | None = None,
    *,
    extra_cards: bool = False,
    first_message: bool = False,
) -> str:
    """Build one turn of a generic flashcard conversation.

    The caller's system instruction is only included on the first message of
    a conversation; later turns rely on the channel's history.
    """
    metadata_section = ""
    if metadata:
        lines = "\n".join(f"{key}: {value}" for key, value in metadata.items())
        metadata_section = f"\n\nContext Metadata:\n{lines}\n"
    mode = GENERIC_DEEP_MODE if extra_cards else GENERIC_STANDARD_MODE
    prefix = system_instruction + INSTRUCTION_SEPARATOR if first_message else ""
    return f"{prefix}Content to analyze:\n{content}{metadata_section}{mode}"


def build_philosophy_system_instruction(policy: DomainPolicy, language: Language = "he") -> str:
    """Combine the shared flashcard methodology with a domain's context."""
    expertise = policy.expertise_for(language)
    additional = policy.additional_instructions_for(language)
    suffix = f"\n\n{additional}" if additional else ""
    if language == "en":
        return SYSTEM_INSTRUCTION_EN.format(expertise=expertise) + suffix
    example = policy.example_for(language)
    return (
        SYSTEM_INSTRUCTION_HE.format(
            expertise=expertise,
            example=f"\n\n{example}" if example else "",
        )
        + suffix
    )


def build_philosophy_message(
    policy: DomainPolicy,
    paragraph: str,
    thinker: str,
    work: str,
    chapter: str | None = None,
    *,
    language: Language = "he",
    extra_cards: bool = False,
    first_message: bool = False,
) -> str:
    """Build one turn of a philosophy flashcard conversation."""
    system_instruction = build_philosophy_system_instruction(policy, language) if first_message else ""

    if language == "en":
        chapter_info = f"Chapter: {chapter}\n" if chapter else ""
        mode = PHILOSOPHY_DEEP_MODE_EN if extra_cards else PHILOSOPHY_STANDARD_MODE_EN
        prefix = system_instruction + INSTRUCTION_SEPARATOR if first_message else ""
        return (
            f"{prefix}Text Information:\n"
            f"Thinker: {thinker}\n"
            f"Work: {work}\n"
            f"{chapter_info}\n"
            f"Paragraph to analyze:\n"
            f"{paragraph}{mode}"
        )

    chapter_info = f"פרק: {chapter}\n" if chapter else ""
    mode = PHILOSOPHY_DEEP_MODE_HE if extra_cards else PHILOSOPHY_STANDARD_MODE_HE
    guidelines = PHILOSOPHY_DEEP_GUIDELINES_HE if extra_cards else PHILOSOPHY_STANDARD_GUIDELINES_HE
    prefix = system_instruction + "\n\n" if first_message else ""
    return (
        f"{prefix}מידע על הטקסט:\n"
        f"הוגה: {thinker}\n"
        f"יצירה: {work}\n"
        f"{chapter_info}\n"
        f"הפסקה לניתוח:\n"
        f"{paragraph}\n"
        f"{mode}\n"
        f"{guidelines}"
    )

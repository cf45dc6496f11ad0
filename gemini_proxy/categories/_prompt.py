"""Hebrew prompt templates for category identification."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

INTRODUCTION = (
    "אתה עוזר לזיהוי קטגוריות בתחום הפילוסופיה היהודית עבור אתר אקדמי. "
    "אני רוצה שתנתח כותרת ותיאור של תוכן ותזהה את הקטגוריות הרלוונטיות ביותר "
    "בצורה מדויקת ומדעית."
)

ACADEMIC_PRECISION = (
    "חשוב מאוד: זהו אתר אקדמי ונדרשת דיוק מקסימלי. "
    "בחר רק קטגוריות שיש להן קשר ישיר ומוכח לתוכן הנתון."
)

_SELECTION_RULES = """
1. דיוק אקדמי: בחר רק קטגוריות שהן רלוונטיות באופן ישיר ל{target}
2. זיהוי ראשי תיבות: רס״ג = רבי סעדיה גאון, רמב״ם = רבי משה בן מימון, וכו׳
3. זיהוי ספרים ומחבריהם:
   - מורה נבוכים, שמונה פרקים, משנה תורה = רמב״ם
   - אמונות ודעות = רס״ג
   - ספר יצירה, ספר הזוהר = קבלה
4. תוכן חז״ל: כל תוכן הקשור למשנה, תלמוד או חכמים מאותה תקופה = חז״ל
5. אל תגביל את מספר הקטגוריות - התמקד בדיוק בלבד
6. הימנע מכפייה: אל תנסה לכפות קטגוריות שאינן מתאימות
""".strip()

SELECTION_PRINCIPLES = "עקרונות לבחירה:\n" + _SELECTION_RULES.format(target="כותרת ולתיאור")

CONSIDERATIONS = """
שקול בקפידה:
- הנושא המרכזי המוצג בכותרת ובתיאור
- ההקשר הפילוסופי והיהודי הספציפי
- הקשר המדויק לתורת ישראל ולמסורת היהודית
- ערכי היסוד והמושגים היהודיים המרכזיים המוזכרים
- זיהוי מחברים דרך ספריהם או ראשי תיבות
- כל תוכן הוא ייחודי - אל תסתמך רק על הדוגמאות, נתח את התוכן הספציפי הזה
""".strip()

JSON_FORMAT_INSTRUCTION = """
החזר תשובה בפורמט JSON בלבד:
{
  "categories": ["קטגוריה מהרשימה 1", "קטגוריה מהרשימה 2"]
}

אל תוסיף סימני קוד או עיצוב markdown.
ודא שאתה בוחר רק קטגוריות מהרשימה שסופקה.
זכור: דיוק אקדמי חשוב יותר מכמות הקטגוריות.
הדוגמאות שניתנו הן רק דוגמאות - יכולות להיות הרבה קטגוריות אחרות או צירופים שונים לחלוטין בהתאם לתוכן הספציפי.
""".strip()

EMPTY_RESPONSE_INSTRUCTION = "אם התוכן אינו מתאים לאף קטגוריה מהרשימה, החזר רשימה ריקה."

# (title, description, expected categories)
EXAMPLES: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "היחס לגיוס לצה״ל להגותו של שעיהו ליבוביץ",
        "אשמח לדעת מה דעת הפרופסור לגביי גיוס לצבא בעד או לא ומה הוא חושב על דעתו "
        "של פרופסור ישעיהו ליבוביץ בכלל גם צבאי וגם איך הוא תופס את משנתו של ליבוביץ",
        ("כללי",),
    ),
    (
        "השכל העיוני",
        "על פי הפילוסופיה של הרמב״ם, השכל העיוני הוא חלק מהשכל האחראי על ידע תיאורטי, "
        "כמו מדעי טבע, להבדיל מידע מעשי כמו הנדסה. ידע זה כולל הבנה מושגית של דברים, "
        "לדוגמה, מי הוא אלוהים להבדיל מאיך לדבר עם אלוהים. השכל העיוני נחשב לכוח "
        "החשוב ביותר מכל כוחות הנפש, והוא היחיד שממשיך להתקיים גם לאחר המוות.",
        ("רמב״ם", "פילוסופיה אריסטוטלית"),
    ),
)

EXAMPLES_PREAMBLE = (
    "חשוב: הדוגמאות הבאות הן רק דוגמאות מייצגות ולא מגבילות. "
    "יש אפשרויות רבות נוספות וצירופים שונים של קטגוריות בהתאם לתוכן הספציפי."
)
EXAMPLES_EPILOGUE = (
    "שוב, אלו רק דוגמאות - יש מקרים רבים נוספים ואתה צריך לנתח כל תוכן בנפרד "
    "ולהחליט על הקטגוריות המתאימות בדיוק לאותו תוכן ספציפי."
)

YOUTUBE_INTRODUCTION = """
אתה עוזר אנליזה של סרטוני יוטיוב בתחום הפילוסופיה היהודית. הסרטונים הם של פרופ׳ שלום צדיק. אני רוצה שבסיכום שלך תכתוב את הנושא המרכזי שפרופ׳ שלום מדבר עליו ותסביר אותו בקצרה תוך שאתה צמוד לתוכן הסרטון.

נתון לך סרטון יוטיוב עם המזהה: {video_id}
קישור: {youtube_url}

עליך:
1. ליצור תיאור קצר וממוקד של תוכן הסרטון בעברית (4-5 משפטים בלבד שמסכמים את הנושא העיקרי שפרופ׳ שלום צדיק מדבר עליו)
2. לזהות את הקטגוריות מהרשימה שתואמות בצורה הטובה ביותר לתוכן הסרטון

עקרונות לבחירת קטגוריות:
{selection_rules}

שקול:
- הנושא המרכזי שהרב/הפרופסור מציג
- ההקשר הפילוסופי והיהודי
- הקשר לתורת ישראל ולמסורת היהודית
- ערכי היסוד והמושגים היהודיים המרכזיים
- זיהוי מחברים דרך ספריהם או ראשי תיבות

החזר תשובה בפורמט JSON בלבד עם המבנה הבא:
{{
  "description": "תיאור קצר של 4-5 משפטים בעברית על הנושא המרכזי שפרופ׳ שלום צדיק מדבר עליו",
  "categories": ["קטגוריה מהרשימה 1", "קטגוריה מהרשימה 2"]
}}

אל תכלול כל הסבר נוסף או טקסט מחוץ לפורמט JSON.
אל תוסיף סימני קוד (```) או כל עיצוב markdown אחר.
החזר JSON נקי לחלוטין.
ודא שהתיאור מורכב מ-4 עד 5 משפטים בלבד ומתמקד בנושא המרכזי.
ודא שאתה בוחר רק קטגוריות מהרשימה שסופקה.
זכור: דיוק אקדמי חשוב יותר מכמות הקטגוריות.
חשוב: אל תהסס לבחור קטגוריות שונות לחלוטין מהדוגמאות - כל סרטון הוא ייחודי ונתח אותו בנפרד בהתאם לתוכן הספציפי שלו.
""".strip()


def build_categories_list(categories: Sequence[str]) -> str:
    """Number the categories one per line, starting at 1."""
    return "\n".join(f"{i}. {category}" for i, category in enumerate(categories, start=1))


def build_examples_section() -> str:
    """Render the worked examples with their expected answers."""
    examples = "\n\n".join(
        f'כותרת: "{title}"\n'
        f'תיאור: "{description}"\n'
        f"תשובה נכונה: {json.dumps(list(expected), ensure_ascii=False)}"
        for title, description, expected in EXAMPLES
    )
    return f"{EXAMPLES_PREAMBLE}\n\n{examples}\n\n{EXAMPLES_EPILOGUE}"


def build_category_prompt(
    title: str,
    description: str,
    categories: Sequence[str],
    introduction: str | None = None,
    clarification: str | None = None,
) -> str:
    """Build the prompt asking the model to pick categories for a title and description."""
    clarification_section = f"\nהקשר נוסף להבהרה: {clarification}\n" if clarification else ""
    return f"""{introduction or INTRODUCTION}

כותרת: {title}
תיאור: {description}{clarification_section}

רשימת הקטגוריות הזמינות:
{build_categories_list(categories)}

{ACADEMIC_PRECISION}

{SELECTION_PRINCIPLES}

דוגמאות:

{build_examples_section()}

{CONSIDERATIONS}

{EMPTY_RESPONSE_INSTRUCTION}

{JSON_FORMAT_INSTRUCTION}"""


def build_youtube_prompt(categories: Sequence[str], video_id: str, youtube_url: str) -> str:
    """Build the prompt asking for a Hebrew summary and categories of a lecture video."""
    introduction = YOUTUBE_INTRODUCTION.format(
        video_id=video_id,
        youtube_url=youtube_url,
        selection_rules=_SELECTION_RULES.format(target="תוכן הסרטון"),
    )
    return f"{introduction}\n\nרשימת הקטגוריות הזמינות:\n{build_categories_list(categories)}"

"""Question clean-up: one question at a time, answerable options."""

import re
import logging
from typing import Dict, List, Pattern
from adaptive_interview.models.question import Question, QuestionType, ScaleRange

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# Each pattern marks where the first clause ends with a group named "cut".
# A bare "and"/"or" joins alternatives inside one question ("sharp or dull?"),
# so the conjunction only splits when a new interrogative clause follows it.
SECOND_CLAUSE = (
    r"(?:do|does|did|is|are|was|were|have|has|had|can|could|will|would|"
    r"should|how|what|when|where|why|which)\b"
)

COMPOUND_PATTERNS: Dict[str, List[Pattern]] = {
    "en": [
        re.compile(r"\s(?P<cut>and)\s+" + SECOND_CLAUSE + r".*\?\s*$", re.IGNORECASE),
        re.compile(r"\s(?P<cut>or)\s+" + SECOND_CLAUSE + r".*\?\s*$", re.IGNORECASE),
        re.compile(r"(?P<cut>\?)\s+and\s+", re.IGNORECASE),
        re.compile(r"(?P<cut>\?)\s+or\s+", re.IGNORECASE),
        re.compile(r"\bwhat\b.*?\s(?P<cut>when)\b", re.IGNORECASE),
        re.compile(r"\bwhat\b.*?\s(?P<cut>where)\b", re.IGNORECASE),
        re.compile(r"\bhow\b.*?\s(?P<cut>what)\b", re.IGNORECASE),
        re.compile(r"\bwhen\b.*?\s(?P<cut>how)\b", re.IGNORECASE),
    ],
    "zh-TW": [
        re.compile(r"(?P<cut>和).*?嗎？\s*$"),
        re.compile(r"(?P<cut>還是).*？\s*$"),
        re.compile(r"(?P<cut>？).*和"),
        re.compile(r"(?P<cut>？).*還是"),
    ],
}

QUESTION_MARKS = re.compile(r"[?？]")

DURATION_OPTIONS = {
    "en": [
        "Less than an hour",
        "A few hours",
        "About one day",
        "A few days",
        "About one week",
        "A few weeks",
        "About one month",
        "A few months",
        "More than six months",
    ],
    "zh-TW": ["少於一小時", "幾小時", "約一天", "幾天", "約一週", "幾週", "約一個月", "幾個月", "超過六個月"],
}

DEFAULT_OPTIONS = {
    "en": {
        "location": ["Head", "Chest", "Abdomen", "Back", "Arms", "Legs", "Other"],
        "frequency": ["Constant", "Several times a day", "Once a day", "A few times a week", "Rarely"],
        "triggers": ["Movement", "Rest", "Eating", "Stress", "Weather changes", "Nothing specific"],
        "associated": ["No other symptoms", "Fever", "Fatigue", "Nausea", "Dizziness", "Other"],
        "medical_history": ["No relevant conditions", "Diabetes", "High blood pressure", "Heart disease", "Previous injuries", "Other"],
        "lifestyle": ["Sedentary", "Lightly active", "Moderately active", "Very active", "Stressful", "Balanced"],
    },
    "zh-TW": {
        "location": ["頭部", "胸部", "腹部", "背部", "手臂", "腿部", "其他"],
        "frequency": ["持續性", "每天數次", "每天一次", "每週數次", "很少"],
        "triggers": ["運動", "休息", "進食", "壓力", "天氣變化", "沒有特定誘因"],
        "associated": ["無其他症狀", "發燒", "疲勞", "噁心", "頭暈", "其他"],
        "medical_history": ["無相關疾病", "糖尿病", "高血壓", "心臟病", "過往傷害", "其他"],
        "lifestyle": ["久坐", "輕度活動", "中度活動", "高度活動", "壓力大", "平衡"],
    },
}


def _terminator(question: str, language: str) -> str:
    if "?" in question:
        return "?"
    if "？" in question or language == "zh-TW":
        return "？"
    return "?"


def _first_clause(question: str, end: int, language: str) -> str:
    head = question[:end].rstrip(" ,;:，、")
    if not head.strip():
        return question
    return head.strip() + _terminator(question, language)


def clean_question(question: str, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Reduce a possibly compound question to its first clause.

    Args:
        question: Question text from the oracle
        language: Language code; unknown codes use the English patterns

    Returns:
        Question text asking exactly one thing
    """
    if not question or not isinstance(question, str):
        return question

    cleaned = question.strip()
    patterns = COMPOUND_PATTERNS.get(language, COMPOUND_PATTERNS[DEFAULT_LANGUAGE])

    for pattern in patterns:
        match = pattern.search(cleaned)
        if match:
            simplified = _first_clause(cleaned, match.start("cut"), language)
            if simplified != cleaned:
                logger.warning(
                    f"Compound question detected: {cleaned!r} -> {simplified!r}"
                )
                cleaned = simplified
            break

    marks = list(QUESTION_MARKS.finditer(cleaned))
    if len(marks) > 1:
        simplified = _first_clause(cleaned, marks[0].start(), language)
        logger.warning(f"Multiple question marks detected: {cleaned!r} -> {simplified!r}")
        cleaned = simplified

    return cleaned


def default_options(topic: str, language: str = DEFAULT_LANGUAGE) -> List[str]:
    """Fallback answer options for an option-style topic."""
    by_language = DEFAULT_OPTIONS.get(language, DEFAULT_OPTIONS[DEFAULT_LANGUAGE])
    return list(by_language.get(topic) or DEFAULT_OPTIONS[DEFAULT_LANGUAGE].get(topic, []))


def normalize_question(question: Question, language: str = DEFAULT_LANGUAGE) -> Question:
    """Give the question a text, type and options the subject can answer."""
    updates = {"text": clean_question(question.text, language)}
    topic = (question.topic or "").lower()

    if topic == "duration" and question.type != QuestionType.MULTIPLE_CHOICE:
        logger.info("Converting duration question to multiple choice")
        updates["type"] = QuestionType.MULTIPLE_CHOICE
        updates["options"] = list(
            DURATION_OPTIONS.get(language, DURATION_OPTIONS[DEFAULT_LANGUAGE])
        )
    elif question.type == QuestionType.TEXT and topic in DEFAULT_OPTIONS[DEFAULT_LANGUAGE]:
        logger.info(f"Converting text question to multiple choice for topic: {topic}")
        updates["type"] = QuestionType.MULTIPLE_CHOICE
        updates["options"] = question.options or default_options(topic, language)
    elif question.type == QuestionType.SCALE and question.scale_range is None:
        updates["scale_range"] = ScaleRange()

    return question.model_copy(update=updates)

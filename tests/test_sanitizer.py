"""Tests for question clean-up and normalisation."""

from adaptive_interview.engine.sanitizer import (
    DURATION_OPTIONS,
    clean_question,
    default_options,
    normalize_question,
)
from adaptive_interview.models.question import Question, QuestionType, ScaleRange


class TestCleanQuestion:
    """Compound questions are reduced to their first clause."""

    def test_single_question_unchanged(self):
        assert clean_question("Where is the pain located?") == "Where is the pain located?"

    def test_and_compound(self):
        assert (
            clean_question("Do you have fever and do you have chills?")
            == "Do you have fever?"
        )

    def test_or_compound_with_second_clause(self):
        assert (
            clean_question("Is the pain constant or does it come and go?")
            == "Is the pain constant?"
        )

    def test_alternatives_in_one_question_unchanged(self):
        assert clean_question("Is the pain sharp or dull?") == "Is the pain sharp or dull?"
        assert (
            clean_question("Do you have nausea and vomiting?")
            == "Do you have nausea and vomiting?"
        )

    def test_two_question_marks(self):
        assert (
            clean_question("How severe is the pain? When did it start?")
            == "How severe is the pain?"
        )

    def test_traditional_chinese_compound(self):
        assert clean_question("你有發燒和咳嗽嗎？", "zh-TW") == "你有發燒？"

    def test_unknown_language_uses_english_patterns(self):
        assert (
            clean_question("Do you have fever and do you have chills?", "fr")
            == "Do you have fever?"
        )

    def test_empty_text(self):
        assert clean_question("") == ""


class TestNormalizeQuestion:
    """Tests for answerable question types and options."""

    def test_duration_becomes_multiple_choice(self):
        question = Question(text="How long have you had this headache?", topic="duration")

        normalized = normalize_question(question)

        assert normalized.type == QuestionType.MULTIPLE_CHOICE
        assert normalized.options == DURATION_OPTIONS["en"]

    def test_duration_options_follow_language(self):
        question = Question(text="頭痛多久了？", topic="duration")

        normalized = normalize_question(question, "zh-TW")

        assert normalized.options == DURATION_OPTIONS["zh-TW"]

    def test_text_topic_gets_default_options(self):
        question = Question(text="What triggers it?", topic="triggers")

        normalized = normalize_question(question)

        assert normalized.type == QuestionType.MULTIPLE_CHOICE
        assert normalized.options == default_options("triggers")

    def test_existing_options_are_kept(self):
        question = Question(text="How often?", topic="frequency", options=["Daily", "Weekly"])

        normalized = normalize_question(question)

        assert normalized.type == QuestionType.MULTIPLE_CHOICE
        assert normalized.options == ["Daily", "Weekly"]

    def test_scale_gets_default_range(self):
        question = Question(text="How bad is it?", type=QuestionType.SCALE)

        normalized = normalize_question(question)

        assert normalized.scale_range == ScaleRange(min=1, max=10)

    def test_text_is_cleaned(self):
        question = Question(text="Do you have fever and do you have chills?", type=QuestionType.YES_NO)

        assert normalize_question(question).text == "Do you have fever?"

    def test_original_question_is_not_modified(self):
        question = Question(text="How long has it lasted?", topic="duration")

        normalize_question(question)

        assert question.type == QuestionType.TEXT
        assert question.options == []

"""
Unit tests for question and model answer synthesis
"""
import random

import pytest

from docqa.models import Difficulty
from docqa.services.questions import (
    EASY_TEMPLATES,
    HARD_TEMPLATES,
    MEDIUM_TEMPLATES,
    MODEL_ANSWER_LEAD_IN,
    MODEL_ANSWER_PLACEHOLDER,
    synthesize_model_answer,
    synthesize_question,
    templates_for,
)

LONG_CHUNK = "Photosynthesis converts light energy into chemical energy stored in glucose"

DOCUMENT = (
    "Photosynthesis converts light energy into chemical energy. "
    "Chlorophyll absorbs mostly blue and red wavelengths of light! "
    "Plants release oxygen as a by-product of the process? "
    "Short one."
)

FOUR_SENTENCE_DOCUMENT = DOCUMENT + " Stomata open to let carbon dioxide into the leaf."


class TestSynthesizeQuestion:
    def test_short_chunk_uses_generic_template(self, exhausted_rng):
        question = synthesize_question("Cell walls", Difficulty.HARD, exhausted_rng)
        assert question == 'What is the significance of "Cell walls" in the context of the document?'

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_chunk_is_embedded_verbatim(self, difficulty):
        for seed in range(10):
            question = synthesize_question(LONG_CHUNK, difficulty, random.Random(seed))
            assert question
            assert f'"{LONG_CHUNK}"' in question

    @pytest.mark.parametrize("difficulty,pool", [
        (Difficulty.EASY, EASY_TEMPLATES),
        (Difficulty.MEDIUM, MEDIUM_TEMPLATES),
        (Difficulty.HARD, HARD_TEMPLATES),
        ("HARD", HARD_TEMPLATES),
    ])
    def test_template_comes_from_difficulty_pool(self, difficulty, pool):
        expected = {t.format(chunk=LONG_CHUNK) for t in pool}
        for seed in range(20):
            assert synthesize_question(LONG_CHUNK, difficulty, random.Random(seed)) in expected

    def test_unknown_difficulty_falls_back_to_medium(self):
        assert templates_for(None) is MEDIUM_TEMPLATES
        expected = {t.format(chunk=LONG_CHUNK) for t in MEDIUM_TEMPLATES}
        assert synthesize_question(LONG_CHUNK, "IMPOSSIBLE", random.Random(5)) in expected

    def test_every_template_reachable(self):
        seen = {synthesize_question(LONG_CHUNK, Difficulty.EASY, random.Random(seed)) for seed in range(50)}
        assert len(seen) == len(EASY_TEMPLATES)


class TestSynthesizeModelAnswer:
    def test_placeholder_without_usable_sentences(self, exhausted_rng):
        assert synthesize_model_answer("q", "Tiny. Bits!", exhausted_rng) == MODEL_ANSWER_PLACEHOLDER
        assert synthesize_model_answer("q", "", exhausted_rng) == MODEL_ANSWER_PLACEHOLDER

    def test_answer_starts_with_lead_in(self):
        answer = synthesize_model_answer("q", DOCUMENT, random.Random(1))
        assert answer.startswith(MODEL_ANSWER_LEAD_IN.strip())
        assert answer.endswith(".")

    def test_sentence_count_follows_random_draw(self, pinned):
        for count in (2, 3, 4):
            answer = synthesize_model_answer("q", FOUR_SENTENCE_DOCUMENT, pinned(count, seed=count))
            body = answer[len(MODEL_ANSWER_LEAD_IN):]
            assert body.count(". ") + 1 == count

    def test_sentence_count_capped_by_document(self, pinned):
        # DOCUMENT has three usable sentences
        for count in (2, 3, 4):
            answer = synthesize_model_answer("q", DOCUMENT, pinned(count, seed=count))
            body = answer[len(MODEL_ANSWER_LEAD_IN):]
            assert body.count(". ") + 1 == min(count, 3)

    def test_sentences_come_from_document(self):
        known = {
            "Photosynthesis converts light energy into chemical energy",
            "Chlorophyll absorbs mostly blue and red wavelengths of light",
            "Plants release oxygen as a by-product of the process",
        }
        answer = synthesize_model_answer("q", DOCUMENT, random.Random(7))
        body = answer[len(MODEL_ANSWER_LEAD_IN):].rstrip(".")
        for sentence in body.split(". "):
            assert sentence in known

    def test_single_sentence_document_draws_once(self, pinned):
        document = "Only one sentence here is long enough to use."
        answer = synthesize_model_answer("q", document, pinned(4))
        assert answer == "The document explains that Only one sentence here is long enough to use."

    def test_question_does_not_change_answer(self):
        first = synthesize_model_answer("What is light?", DOCUMENT, random.Random(11))
        second = synthesize_model_answer("Something else entirely", DOCUMENT, random.Random(11))
        assert first == second

"""
Matching game tests: desktop board and compact quiz.
Run: python -m pytest tests/test_match_practice.py -v
"""

import asyncio

import pytest
from conftest import FAST_SETTINGS, FakeLanguageService, make_words, settle

from drillstack_app.modules.practice.engine.match_board_controller import MatchBoardController
from drillstack_app.modules.practice.engine.match_quiz_controller import MatchQuizController
from drillstack_app.modules.practice.schemas import (
    CARD_IDLE,
    CARD_MATCHED,
    CARD_SELECTED,
    CARD_WRONG,
    COLUMN_SOURCE,
    COLUMN_TARGET,
    OPTION_CORRECT,
    OPTION_IDLE,
    OPTION_INCORRECT,
    OUTCOME_INCORRECT,
)
from drillstack_app.modules.words.interface import InMemoryWordStore


def _states(snapshot):
    return {(card.column, card.word_id): card.state for card in snapshot.cards}


def _board(word_store, language_service=None, rng=None, settings=None):
    return MatchBoardController(
        word_store,
        language_service=language_service,
        settings=settings if settings is not None else FAST_SETTINGS,
        rng=rng,
    )


def _quiz(word_store, language_service=None, rng=None, settings=None):
    return MatchQuizController(
        word_store,
        language_service=language_service,
        settings=settings if settings is not None else FAST_SETTINGS,
        rng=rng,
    )


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

class TestMatchPreconditions:

    @pytest.mark.parametrize('factory', [_board, _quiz])
    def test_needs_four_words(self, factory):
        controller = factory(InMemoryWordStore(make_words(3)))
        ok, message = controller.start()

        assert ok is False
        assert '4' in message
        blocked = controller.snapshot().blocked
        assert blocked['code'] == 'NOT_ENOUGH_WORDS'
        assert blocked['details'] == {'required': 4, 'available': 3}

    @pytest.mark.parametrize('factory', [_board, _quiz])
    def test_four_words_is_enough(self, factory):
        controller = factory(InMemoryWordStore(make_words(4)))
        ok, _ = controller.start()
        assert ok is True
        assert controller.snapshot().blocked is None


# ---------------------------------------------------------------------------
# Desktop board
# ---------------------------------------------------------------------------

class TestMatchBoard:

    def test_board_layout(self, word_store, rng):
        controller = _board(word_store, rng=rng)
        controller.start()

        snap = controller.snapshot()
        sources = [c for c in snap.cards if c.column == COLUMN_SOURCE]
        targets = [c for c in snap.cards if c.column == COLUMN_TARGET]
        assert len(sources) == len(targets) == 5
        assert {c.word_id for c in sources} == {c.word_id for c in targets}
        assert all(c.state == CARD_IDLE for c in snap.cards)
        assert snap.scoreboard.total == 5
        assert snap.remaining_count == 5

    def test_board_is_capped(self, rng):
        controller = _board(InMemoryWordStore(make_words(10)), rng=rng)
        controller.start()

        snap = controller.snapshot()
        sources = {c.word_id for c in snap.cards if c.column == COLUMN_SOURCE}
        assert len(sources) == 8
        assert snap.scoreboard.total == 8

    def test_matching_pair(self, word_store, rng):
        service = FakeLanguageService()
        controller = _board(word_store, language_service=service, rng=rng)

        async def scenario():
            controller.start()
            assert controller.select_card(COLUMN_SOURCE, 2) is None
            assert _states(controller.snapshot())[(COLUMN_SOURCE, 2)] == CARD_SELECTED
            assert controller.select_card(COLUMN_TARGET, 2) is True
            await settle()

        asyncio.run(scenario())
        snap = controller.snapshot()
        states = _states(snap)
        assert states[(COLUMN_SOURCE, 2)] == CARD_MATCHED
        assert states[(COLUMN_TARGET, 2)] == CARD_MATCHED
        assert snap.scoreboard.correct == 1
        assert snap.remaining_count == 4
        assert service.calls == [('car', 'en-US', None)]

    def test_target_first_also_matches(self, word_store, rng):
        controller = _board(word_store, rng=rng)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_TARGET, 3)
            return controller.select_card(COLUMN_SOURCE, 3)

        assert asyncio.run(scenario()) is True

    def test_same_column_moves_selection(self, word_store, rng):
        controller = _board(word_store, rng=rng)
        controller.start()
        controller.select_card(COLUMN_SOURCE, 1)
        controller.select_card(COLUMN_SOURCE, 4)

        states = _states(controller.snapshot())
        assert states[(COLUMN_SOURCE, 1)] == CARD_IDLE
        assert states[(COLUMN_SOURCE, 4)] == CARD_SELECTED

    def test_mismatch_flashes_then_resets(self, word_store, rng):
        controller = _board(word_store, rng=rng)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_SOURCE, 1)
            assert controller.select_card(COLUMN_TARGET, 2) is False

            snap = controller.snapshot()
            states = _states(snap)
            assert states[(COLUMN_SOURCE, 1)] == CARD_WRONG
            assert states[(COLUMN_TARGET, 2)] == CARD_WRONG
            assert snap.feedback.outcome == OUTCOME_INCORRECT

            await settle()

        asyncio.run(scenario())
        snap = controller.snapshot()
        assert all(card.state == CARD_IDLE for card in snap.cards)
        assert snap.scoreboard.correct == 0
        assert snap.feedback is None

    def test_wrong_cards_are_not_selectable(self, word_store, rng):
        settings = dict(FAST_SETTINGS, MATCH_WRONG_FLASH_DELAY=10)
        controller = _board(word_store, rng=rng, settings=settings)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_SOURCE, 1)
            controller.select_card(COLUMN_TARGET, 2)
            assert controller.select_card(COLUMN_SOURCE, 1) is None
            assert controller.session.selected is None
            controller.dispose()

        asyncio.run(scenario())

    def test_new_mismatch_replaces_pending_flash(self, word_store, rng):
        settings = dict(FAST_SETTINGS, MATCH_WRONG_FLASH_DELAY=10)
        controller = _board(word_store, rng=rng, settings=settings)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_SOURCE, 1)
            controller.select_card(COLUMN_TARGET, 2)
            controller.select_card(COLUMN_SOURCE, 3)
            controller.select_card(COLUMN_TARGET, 4)
            states = _states(controller.snapshot())
            controller.dispose()
            return states

        states = asyncio.run(scenario())
        assert states[(COLUMN_SOURCE, 1)] == CARD_IDLE
        assert states[(COLUMN_TARGET, 2)] == CARD_IDLE
        assert states[(COLUMN_SOURCE, 3)] == CARD_WRONG
        assert states[(COLUMN_TARGET, 4)] == CARD_WRONG

    def test_matched_cards_ignore_input(self, word_store, rng):
        controller = _board(word_store, rng=rng)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_SOURCE, 1)
            controller.select_card(COLUMN_TARGET, 1)
            assert controller.select_card(COLUMN_SOURCE, 1) is None
            assert controller.session.selected is None

        asyncio.run(scenario())

    def test_complete_board(self, word_store, rng):
        controller = _board(word_store, rng=rng)

        async def scenario():
            controller.start()
            for word in word_store.list_words():
                controller.select_card(COLUMN_SOURCE, word.id)
                controller.select_card(COLUMN_TARGET, word.id)

        asyncio.run(scenario())
        snap = controller.snapshot()
        assert snap.complete is True
        assert snap.scoreboard.correct == snap.scoreboard.total == 5
        assert snap.remaining_count == 0

    def test_skip_clears_selection(self, word_store, rng):
        controller = _board(word_store, rng=rng)
        controller.start()
        controller.select_card(COLUMN_SOURCE, 1)
        controller.skip()

        assert controller.session.selected is None
        assert _states(controller.snapshot())[(COLUMN_SOURCE, 1)] == CARD_IDLE

    def test_bad_input(self, word_store, rng):
        controller = _board(word_store, rng=rng)
        controller.start()
        with pytest.raises(ValueError):
            controller.select_card('middle', 1)
        with pytest.raises(KeyError):
            controller.select_card(COLUMN_SOURCE, 99)


# ---------------------------------------------------------------------------
# Compact quiz
# ---------------------------------------------------------------------------

class TestMatchQuiz:

    def test_first_presentation(self, word_store, rng):
        controller = _quiz(word_store, rng=rng)
        controller.start()

        snap = controller.snapshot()
        word = controller.current_word
        assert snap.prompt_text == word.source_text
        assert snap.position == 1
        assert snap.scoreboard.total == 5
        assert len(snap.options) == 5
        assert {o.word_id for o in snap.options} == {w.id for w in word_store.list_words()}
        assert all(o.state == OPTION_IDLE for o in snap.options)

    def test_wrong_option_reveals_correct_one(self, word_store, rng):
        controller = _quiz(word_store, rng=rng)

        async def scenario():
            controller.start()
            word = controller.current_word
            wrong_id = next(w.id for w in word_store.list_words() if w.id != word.id)

            assert controller.select_option(wrong_id) is False

            snap = controller.snapshot()
            states = {o.word_id: o.state for o in snap.options}
            assert states[wrong_id] == OPTION_INCORRECT
            assert states[word.id] == OPTION_CORRECT
            assert snap.feedback.correct_answer == word.target_text
            assert snap.locked is True
            assert controller.select_option(word.id) is None

            await settle()
            return word

        word = asyncio.run(scenario())
        snap = controller.snapshot()
        assert snap.position == 2
        assert controller.current_word != word
        assert snap.scoreboard.correct == 0
        assert len(snap.options) == 5
        assert all(o.state == OPTION_IDLE for o in snap.options)

    def test_correct_option_scores_and_speaks(self, word_store, rng):
        service = FakeLanguageService()
        controller = _quiz(word_store, language_service=service, rng=rng)

        async def scenario():
            controller.start()
            word = controller.current_word
            assert controller.select_option(word.id) is True
            await settle()
            return word

        word = asyncio.run(scenario())
        assert controller.snapshot().scoreboard.correct == 1
        assert service.calls == [(word.target_text, word.language_code, None)]

    def test_skip_counts_as_missed(self, word_store, rng):
        controller = _quiz(word_store, rng=rng)
        controller.start()
        controller.skip()

        snap = controller.snapshot()
        assert snap.position == 2
        assert snap.scoreboard.correct == 0

    def test_each_word_presented_once(self, word_store, rng):
        controller = _quiz(word_store, rng=rng)
        seen = []

        async def scenario():
            controller.start()
            while not controller.snapshot().complete:
                word = controller.current_word
                seen.append(word.id)
                controller.select_option(word.id)
                await settle()

        asyncio.run(scenario())
        snap = controller.snapshot()
        assert sorted(seen) == [1, 2, 3, 4, 5]
        assert snap.scoreboard.correct == snap.scoreboard.total == 5
        assert snap.options == []
        assert snap.position is None

    def test_names_answer_language(self, rng):
        controller = _quiz(InMemoryWordStore(make_words(4, language_code='de-DE')), rng=rng)
        controller.start()
        assert controller.snapshot().answer_language_name == 'German'


class TestMatchDelays:
    """A wrong pick stays on screen longer than a right one."""

    QUIZ_SETTINGS = dict(FAST_SETTINGS, MATCH_QUIZ_CORRECT_DELAY=0.01, MATCH_QUIZ_WRONG_DELAY=0.2)

    def test_correct_pick_advances_after_short_delay(self, word_store, rng):
        controller = _quiz(word_store, rng=rng, settings=self.QUIZ_SETTINGS)

        async def scenario():
            controller.start()
            controller.select_option(controller.current_word.id)
            await settle(0.05)
            position = controller.snapshot().position
            controller.dispose()
            return position

        assert asyncio.run(scenario()) == 2

    def test_wrong_pick_waits_longer(self, word_store, rng):
        controller = _quiz(word_store, rng=rng, settings=self.QUIZ_SETTINGS)

        async def scenario():
            controller.start()
            word = controller.current_word
            wrong_id = next(w.id for w in word_store.list_words() if w.id != word.id)
            controller.select_option(wrong_id)

            await settle(0.05)
            assert controller.snapshot().position == 1
            assert controller.snapshot().locked is True

            await settle(0.25)
            assert controller.snapshot().position == 2

        asyncio.run(scenario())

    def test_wrong_flash_lasts_for_its_delay(self, word_store, rng):
        settings = dict(FAST_SETTINGS, MATCH_WRONG_FLASH_DELAY=0.2)
        controller = _board(word_store, rng=rng, settings=settings)

        async def scenario():
            controller.start()
            controller.select_card(COLUMN_SOURCE, 1)
            controller.select_card(COLUMN_TARGET, 2)

            await settle(0.05)
            assert _states(controller.snapshot())[(COLUMN_SOURCE, 1)] == CARD_WRONG

            await settle(0.25)
            assert _states(controller.snapshot())[(COLUMN_SOURCE, 1)] == CARD_IDLE

        asyncio.run(scenario())


class TestMatchWithoutEventLoop:

    def test_quiz_pick_leaves_presentation_untouched(self, word_store, rng):
        controller = _quiz(word_store, rng=rng)
        controller.start()

        with pytest.raises(RuntimeError):
            controller.select_option(controller.current_word.id)

        snap = controller.snapshot()
        assert snap.scoreboard.correct == 0
        assert snap.locked is False
        assert snap.feedback is None
        assert all(o.state == OPTION_IDLE for o in snap.options)

    def test_board_mismatch_leaves_cards_untouched(self, word_store, rng):
        controller = _board(word_store, rng=rng)
        controller.start()
        controller.select_card(COLUMN_SOURCE, 1)

        with pytest.raises(RuntimeError):
            controller.select_card(COLUMN_TARGET, 2)

        states = _states(controller.snapshot())
        assert states[(COLUMN_SOURCE, 1)] == CARD_SELECTED
        assert states[(COLUMN_TARGET, 2)] == CARD_IDLE

    def test_board_match_with_audio_leaves_cards_untouched(self, word_store, rng):
        controller = _board(word_store, language_service=FakeLanguageService(), rng=rng)
        controller.start()
        controller.select_card(COLUMN_SOURCE, 1)

        with pytest.raises(RuntimeError):
            controller.select_card(COLUMN_TARGET, 1)

        snap = controller.snapshot()
        assert snap.scoreboard.correct == 0
        assert _states(snap)[(COLUMN_TARGET, 1)] == CARD_IDLE

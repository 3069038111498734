import random
import tempfile
import unittest
from pathlib import Path

from timestables.app.session_manager import RoundSession
from timestables.drills.question_set import MIXED, QuestionSpec
from timestables.storage.store import FactStatsStore
from timestables.util.clock import FakeClock


class RoundSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = FactStatsStore(Path(self._tmp.name))
        self.clock = FakeClock()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _session(self, questions=None) -> RoundSession:
        if questions is None:
            questions = [QuestionSpec(3, 4, 12), QuestionSpec(12, 12, 144)]
        session = RoundSession(questions=questions, store=self.store, clock=self.clock)
        session._present()
        return session

    def _type(self, session: RoundSession, text: str) -> None:
        for ch in text:
            session.press_digit(ch)

    def test_start_builds_fifteen_questions(self) -> None:
        session = RoundSession.start(6, self.store, rng=random.Random(1), clock=self.clock)
        self.assertEqual(len(session.questions), 15)
        self.assertEqual(session.progress, "1 / 15")
        self.assertFalse(session.finished)

    def test_start_passes_round_options(self) -> None:
        session = RoundSession.start(
            MIXED, self.store, rng=random.Random(2), clock=self.clock,
            count=4, max_digits=2, correct_delay_ms=100, incorrect_delay_ms=200,
        )
        self.assertEqual(len(session.questions), 4)
        self.assertEqual(session.max_digits, 2)
        for ch in "123":
            session.press_digit(ch)
        self.assertEqual(session.answer_buffer, "12")
        result = session.submit()
        self.assertEqual(session.feedback_delay_ms(result), 100 if result.correct else 200)

    def test_correct_answer_is_timed_and_persisted(self) -> None:
        session = self._session()
        self.clock.advance(1.5)
        self._type(session, "12")
        result = session.submit()
        self.assertTrue(result.correct)
        self.assertAlmostEqual(result.time_taken_seconds, 1.5)
        rec = self.store.get(3, 4)
        self.assertAlmostEqual(rec.confidence, 100.0)
        self.assertEqual(rec.attempts, 1)
        self.assertEqual(session.feedback_delay_ms(result), 800)

    def test_wrong_answer(self) -> None:
        session = self._session()
        self.clock.advance(5.0)
        self._type(session, "13")
        result = session.submit()
        self.assertFalse(result.correct)
        self.assertEqual(result.user_answer, 13)
        self.assertEqual(result.expected, 12)
        self.assertAlmostEqual(self.store.get(3, 4).confidence, 15.0)
        self.assertEqual(session.feedback_delay_ms(result), 1500)

    def test_empty_submit_ignored(self) -> None:
        session = self._session()
        self.assertIsNone(session.submit())
        self.assertEqual(self.store.load(), {})

    def test_buffer_capped_at_three_digits(self) -> None:
        session = self._session()
        self._type(session, "14449")
        self.assertEqual(session.answer_buffer, "144")
        session.backspace()
        self.assertEqual(session.answer_buffer, "14")

    def test_input_ignored_during_feedback(self) -> None:
        session = self._session()
        self._type(session, "12")
        session.submit()
        self.assertTrue(session.showing_feedback)
        session.press_digit("5")
        session.backspace()
        self.assertEqual(session.answer_buffer, "12")
        self.assertIsNone(session.submit())
        self.assertEqual(self.store.get(3, 4).attempts, 1)

    def test_advance_restarts_timer_and_finishes(self) -> None:
        session = self._session()
        self.clock.advance(3.0)
        self._type(session, "12")
        session.submit()
        session.advance()
        self.assertEqual(session.progress, "2 / 2")
        self.assertEqual(session.answer_buffer, "")
        self.clock.advance(1.0)
        self._type(session, "144")
        result = session.submit()
        self.assertAlmostEqual(result.time_taken_seconds, 1.0)
        session.advance()
        self.assertTrue(session.finished)
        self.assertIsNone(session.current_question)
        self.assertEqual(session.results.correct_count, 2)

    def test_abandon_keeps_persisted_answers(self) -> None:
        session = self._session()
        self._type(session, "12")
        session.submit()
        session.advance()
        session.abandon()
        self.assertTrue(session.abandoned)
        self.assertEqual(session.results.answered, 0)
        self.assertEqual(self.store.get(3, 4).attempts, 1)
        self.assertIsNone(self.store.get(12, 12))


class EndToEndTableRoundTests(unittest.TestCase):
    """Table 9: first sighting of each fact right in 1s, repeats wrong in 9s."""

    def test_round(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = FactStatsStore(Path(tmp))
            clock = FakeClock()
            session = RoundSession.start(9, store, rng=random.Random(2024), clock=clock)

            first_key = {}
            repeats = []
            while not session.finished:
                q = session.current_question
                fact = (min(q.a, q.b), max(q.a, q.b))
                if fact in first_key:
                    repeats.append((first_key[fact], (q.a, q.b)))
                    clock.advance(9.0)
                    answer = q.answer + 1
                else:
                    first_key[fact] = (q.a, q.b)
                    clock.advance(1.0)
                    answer = q.answer
                for ch in str(answer):
                    session.press_digit(ch)
                session.submit()
                session.advance()

            self.assertEqual(len(first_key), 12)
            self.assertEqual(len(repeats), 3)
            self.assertEqual(session.results.correct_count, 12)
            self.assertEqual(session.results.tier, "amazing")

            table = store.load()
            repeated_first = {first for first, _ in repeats}
            for key in first_key.values():
                if key not in repeated_first:
                    self.assertAlmostEqual(table[key].confidence, 100.0)
                    self.assertEqual(table[key].attempts, 1)
            for first, again in repeats:
                if first == again:
                    # same displayed order: 100 then 0 blended
                    self.assertAlmostEqual(table[first].confidence, 70.0)
                    self.assertEqual(table[first].attempts, 2)
                else:
                    self.assertAlmostEqual(table[first].confidence, 100.0)
                    self.assertEqual(table[first].attempts, 1)
                    self.assertEqual(table[again].confidence, 0.0)
                    self.assertEqual(table[again].attempts, 1)


if __name__ == "__main__":
    unittest.main()

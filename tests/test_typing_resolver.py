"""
Tests for the typing resolver state machine.
Tests verify the outcome sequence produced for each keystroke.
"""

import pytest


@pytest.fixture
def recorder():
    """Resolver wired to a list that records every delivered outcome."""
    from wordsiege.systems.typing_resolver import TypingResolver

    outcomes = []
    resolver = TypingResolver(outcomes.append)
    return resolver, outcomes


class TestBinding:
    """Tests for binding and unbinding target words."""

    def test_set_target_emits_empty_progress(self, recorder):
        """Test binding a word clears the buffer and reports it."""
        from wordsiege.systems.typing_resolver import Progress

        resolver, outcomes = recorder
        resolver.set_target("castle")

        assert resolver.target_word == "castle"
        assert resolver.input_buffer == ""
        assert outcomes == [Progress("", False)]

    def test_clear_target_is_idempotent(self, recorder):
        """Test clearing twice only reports once."""
        resolver, outcomes = recorder
        resolver.set_target("castle")
        outcomes.clear()

        resolver.clear_target()
        resolver.clear_target()

        assert resolver.target_word == ""
        assert len(outcomes) == 1

    def test_set_target_with_input_seeds_buffer(self, recorder):
        """Test re-targeting mid-type keeps the typed prefix."""
        from wordsiege.systems.typing_resolver import Progress

        resolver, outcomes = recorder
        resolver.set_target_with_input("storm", "st")

        assert resolver.input_buffer == "st"
        assert outcomes == [Progress("st", False)]

    def test_set_target_with_bad_prefix_falls_back(self, recorder):
        """Test a prefix that does not match gives an empty buffer."""
        resolver, _ = recorder
        resolver.set_target_with_input("storm", "sk")

        assert resolver.target_word == "storm"
        assert resolver.input_buffer == ""

    def test_set_target_with_full_word_completes(self, recorder):
        """Test seeding the whole word completes immediately."""
        from wordsiege.systems.typing_resolver import Complete

        resolver, outcomes = recorder
        resolver.set_target_with_input("a", "a")

        assert outcomes[-1] == Complete("a")
        assert resolver.completed is True


class TestKeystrokes:
    """Tests for handle_key outcomes."""

    def test_correct_letters_progress_then_complete(self, recorder):
        """Test typing a whole word ends with Complete."""
        from wordsiege.systems.typing_resolver import Progress, Complete

        resolver, _ = recorder
        resolver.set_target("sky")

        resolver.handle_key("s")
        resolver.handle_key("k")
        result = resolver.handle_key("y")

        assert result == [Progress("sky", False), Complete("sky")]

    def test_keys_after_completion_ignored(self, recorder):
        """Test no outcomes are produced once the word is complete."""
        resolver, _ = recorder
        resolver.set_target("ok")
        resolver.handle_key("o")
        resolver.handle_key("k")

        assert resolver.handle_key("x") == []
        assert resolver.input_buffer == "ok"

    def test_uppercase_is_normalized(self, recorder):
        """Test letters are matched case-insensitively."""
        from wordsiege.systems.typing_resolver import Progress

        resolver, _ = recorder
        resolver.set_target("fire")
        resolver.handle_key("f")

        assert resolver.handle_key("I") == [Progress("fi", False)]

    def test_non_alphanumeric_keys_ignored(self, recorder):
        """Test punctuation and named keys produce nothing."""
        resolver, outcomes = recorder
        resolver.set_target("fire")
        outcomes.clear()

        assert resolver.handle_key("!") == []
        assert resolver.handle_key("shift") == []
        assert resolver.handle_key("") == []
        assert outcomes == []

    def test_wrong_letter_mismatch_then_mistake(self, recorder):
        """Test a wrong letter is offered as Mismatch before counting."""
        from wordsiege.systems.typing_resolver import Progress, Mismatch, Mistake

        resolver, _ = recorder
        resolver.set_target("storm")
        resolver.handle_key("s")

        result = resolver.handle_key("k")

        assert result == [Mismatch("sk", 1), Mistake(), Progress("s", True)]
        assert resolver.input_buffer == "s"
        assert resolver.is_mistake is True

    def test_first_letter_offered_as_free_type(self, recorder):
        """Test an empty buffer reports FreeType before matching."""
        from wordsiege.systems.typing_resolver import FreeType, Progress

        resolver, _ = recorder
        resolver.set_target("fire")

        assert resolver.handle_key("f") == [FreeType("f"), Progress("f", False)]

    def test_backspace_clears_buffer(self, recorder):
        """Test backspace empties the buffer and reports Clear."""
        from wordsiege.systems.typing_resolver import Progress, Clear, BACKSPACE

        resolver, _ = recorder
        resolver.set_target("storm")
        resolver.handle_key("s")
        resolver.handle_key("t")

        assert resolver.handle_key(BACKSPACE) == [Progress("", False), Clear()]
        assert resolver.input_buffer == ""

    def test_no_target_absorbs_letters(self, recorder):
        """Test letters without a bound word only report FreeType."""
        from wordsiege.systems.typing_resolver import FreeType

        resolver, _ = recorder

        assert resolver.handle_key("a") == [FreeType("a")]
        assert resolver.input_buffer == ""


class TestRetargeting:
    """Tests for the consumer re-targeting during delivery."""

    def test_free_type_retarget_processes_key_once(self):
        """Test a re-target inside FreeType does not double the letter."""
        from wordsiege.systems.typing_resolver import TypingResolver, FreeType

        resolver = TypingResolver()

        def handler(outcome):
            if isinstance(outcome, FreeType):
                resolver.set_target_with_input("knight", outcome.char)

        resolver.set_handler(handler)
        resolver.set_target("storm")
        resolver.handle_key("k")

        assert resolver.target_word == "knight"
        assert resolver.input_buffer == "k"

    def test_mismatch_retarget_skips_mistake(self):
        """Test a re-target inside Mismatch suppresses the mistake."""
        from wordsiege.systems.typing_resolver import TypingResolver, Mismatch, Mistake

        resolver = TypingResolver()

        def handler(outcome):
            if isinstance(outcome, Mismatch):
                resolver.set_target_with_input("sky", outcome.next_input)

        resolver.set_handler(handler)
        resolver.set_target("storm")
        resolver.handle_key("s")
        result = resolver.handle_key("k")

        assert not any(isinstance(o, Mistake) for o in result)
        assert resolver.target_word == "sky"
        assert resolver.input_buffer == "sk"

    def test_completion_during_free_type_stops_processing(self):
        """Test a single-letter word completed by the re-target is not retyped."""
        from wordsiege.systems.typing_resolver import TypingResolver, FreeType, Complete

        resolver = TypingResolver()
        completed = []

        def handler(outcome):
            if isinstance(outcome, FreeType):
                resolver.set_target_with_input("a", outcome.char)
            elif isinstance(outcome, Complete):
                completed.append(outcome.word)
                resolver.set_target("")

        resolver.set_handler(handler)
        resolver.set_target("zebra")
        resolver.handle_key("a")

        assert completed == ["a"]
        assert resolver.target_word == ""

"""Tests for the typewriter renderer, reply formatting and the virtual clock."""

import pytest

from mother.clock import VirtualClock
from mother.renderer import (
    ResponseRenderer,
    RevealPhase,
    format_reply,
    suggest_followups,
)


# ── format_reply ─────────────────────────────────────────


class TestFormatReply:
    def test_breaks_before_each_item(self):
        assert format_reply("Steps: 1. Seal 2. Vent 3. Run") == "Steps:\n1. Seal\n2. Vent\n3. Run"

    def test_multi_digit_items(self):
        assert format_reply("a 10. ten 11. eleven") == "a\n10. ten\n11. eleven"

    def test_leaves_other_numbers_alone(self):
        text = "Gravity is 1.1g and the year is 2122."
        assert format_reply(text) == text

    def test_item_at_start_untouched(self):
        assert format_reply("1. First") == "1. First"


# ── Suggestions ──────────────────────────────────────────


class TestSuggestions:
    def test_planet(self):
        assert suggest_followups("PLANETARY RECORD")[0] == "/planets lv-426"

    def test_alien_keywords(self):
        for text in ("alien lifeform", "XENOMORPH", "a hybrid"):
            assert suggest_followups(text)[0] == "/aliens xenomorph"

    def test_directive(self):
        assert suggest_followups("Priority directive received")[0] == "WHAT IS SPECIAL ORDER 937?"

    def test_system(self):
        assert suggest_followups("SYSTEM NOMINAL") == ["SHOW MODELS", "/wiki", "REPORT SHIP STATUS"]

    def test_first_match_wins(self):
        # mentions both a planet and an alien
        assert suggest_followups("alien planet")[0] == "/planets lv-426"

    def test_nothing_matches(self):
        assert suggest_followups("AFFIRMATIVE.") == []

    def test_always_three(self):
        assert len(suggest_followups("status report")) == 3


# ── Reveal state machine ─────────────────────────────────


@pytest.fixture
def completed():
    return []


@pytest.fixture
def renderer(clock, completed):
    return ResponseRenderer(clock, on_complete=lambda mid, text: completed.append((mid, text)))


class TestReveal:
    def test_reveals_one_char_per_tick(self, renderer, clock, completed):
        renderer.start("m1", "HELLO", 30)
        assert renderer.visible("m1", "HELLO") == ""
        clock.advance(30)
        assert renderer.visible("m1", "HELLO") == "H"
        clock.advance(60)
        assert renderer.visible("m1", "HELLO") == "HEL"
        assert renderer.is_revealing("m1")
        clock.advance(60)
        assert renderer.visible("m1", "HELLO") == "HELLO"
        assert renderer.phase is RevealPhase.DONE
        assert not renderer.is_revealing()
        assert completed == [("m1", "HELLO")]

    def test_n_chars_take_n_ticks(self, renderer, clock):
        renderer.start("m1", "ABCDEFGHIJ", 15)
        clock.advance(15 * 9)
        assert renderer.is_revealing()
        clock.advance(15)
        assert not renderer.is_revealing()

    def test_empty_text_finishes_immediately(self, renderer, completed):
        renderer.start("m1", "", 30)
        assert renderer.phase is RevealPhase.DONE
        assert completed == [("m1", "")]

    def test_cancel_stops_ticks(self, renderer, clock, completed):
        renderer.start("m1", "HELLO", 30)
        clock.advance(60)
        renderer.cancel()
        assert renderer.phase is RevealPhase.IDLE
        assert renderer.visible("m1", "HELLO") == "HELLO"
        clock.advance(1000)
        assert completed == []
        assert clock.pending == 0

    def test_new_reveal_replaces_old(self, renderer, clock, completed):
        renderer.start("m1", "FIRST", 30)
        clock.advance(30)
        renderer.start("m2", "SECOND", 30)
        assert renderer.active_id == "m2"
        assert not renderer.is_revealing("m1")
        clock.run_until_idle()
        assert completed == [("m2", "SECOND")]

    def test_stale_tick_ignored(self, renderer, clock):
        renderer.start("m1", "ABC", 30)
        renderer._reveal.message_id = "other"
        clock.advance(30)
        assert renderer.position == 0

    def test_visible_for_other_message_is_full(self, renderer):
        renderer.start("m1", "ABC", 30)
        assert renderer.visible("m0", "OLD TEXT") == "OLD TEXT"


# ── VirtualClock ─────────────────────────────────────────


class TestVirtualClock:
    def test_fires_in_time_order(self):
        clock = VirtualClock()
        fired = []
        clock.call_later(20, lambda: fired.append("b"))
        clock.call_later(10, lambda: fired.append("a"))
        clock.call_later(20, lambda: fired.append("c"))
        clock.advance(15)
        assert fired == ["a"]
        clock.advance(5)
        assert fired == ["a", "b", "c"]
        assert clock.now == 20

    def test_cancelled_timer_skipped(self):
        clock = VirtualClock()
        fired = []
        handle = clock.call_later(10, lambda: fired.append("x"))
        handle.cancel()
        clock.advance(100)
        assert fired == []
        assert clock.pending == 0

    def test_callbacks_may_schedule(self):
        clock = VirtualClock()
        fired = []

        def again():
            fired.append(clock.now)
            if len(fired) < 3:
                clock.call_later(10, again)

        clock.call_later(10, again)
        clock.run_until_idle()
        assert fired == [10, 20, 30]

    def test_run_until_idle_limit(self):
        clock = VirtualClock()

        def forever():
            clock.call_later(1, forever)

        clock.call_later(1, forever)
        with pytest.raises(RuntimeError):
            clock.run_until_idle(limit=50)

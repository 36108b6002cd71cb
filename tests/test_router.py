"""Tests for mother.router — classification order and every handler branch."""

import pytest

from mother.models import ModelInfo, ProviderReply, SessionState, Settings
from mother.router import (
    INTERFACE_ERROR,
    INVALID_SELECTION,
    NO_MODELS,
    REPLY_LATENCY_MS,
    SETTINGS_ACK,
    Intent,
)


IDLE = SessionState()
BOOTING = SessionState(boot_in_progress=True)


def awaiting(models):
    return SessionState(awaiting_model_selection=True, available_models=models)


# ── Classification ───────────────────────────────────────


class TestClassify:
    @pytest.mark.parametrize("text,intent", [
        ("clear", Intent.CLEAR),
        ("  CLS  ", Intent.CLEAR),
        ("settings", Intent.OPEN_SETTINGS),
        ("Config", Intent.OPEN_SETTINGS),
        ("show models", Intent.LIST_MODELS),
        ("LIST MODELS", Intent.LIST_MODELS),
        ("/wiki", Intent.REFERENCE),
        ("/planets lv-426", Intent.REFERENCE),
        ("/MOVIES", Intent.REFERENCE),
        ("/foo bar", Intent.UNKNOWN_COMMAND),
        ("/planetsx", Intent.UNKNOWN_COMMAND),
        ("what is special order 937?", Intent.CHAT),
        ("1", Intent.CHAT),
        ("clear the airlock", Intent.CHAT),
    ])
    def test_idle_state(self, router, text, intent):
        assert router.classify(text, IDLE).intent is intent

    @pytest.mark.parametrize("text", ["clear", "settings", "/wiki", "hello", "1"])
    def test_booting_rejects_everything(self, router, text):
        route = router.classify(text, BOOTING)
        assert route.intent is Intent.REJECTED
        assert route.echo is False

    def test_integer_only_selects_while_awaiting(self, router, three_models):
        assert router.classify("1", awaiting(three_models)).intent is Intent.SELECT_MODEL
        assert router.classify(" 7 ", awaiting(three_models)).intent is Intent.SELECT_MODEL

    @pytest.mark.parametrize("text", ["1.5", "one", "1 please", ""])
    def test_non_integer_while_awaiting_is_not_a_selection(self, router, three_models, text):
        assert router.classify(text, awaiting(three_models)).intent is not Intent.SELECT_MODEL

    def test_clear_beats_selection(self, router, three_models):
        assert router.classify("clear", awaiting(three_models)).intent is Intent.CLEAR

    def test_only_chat_shows_processing(self, router):
        flagged = [r.intent for r in router.routes if r.shows_processing]
        assert flagged == [Intent.CHAT]

    def test_clear_is_not_echoed(self, router):
        assert router.classify("clear", IDLE).echo is False
        assert router.classify("settings", IDLE).echo is True


# ── Handlers ─────────────────────────────────────────────


async def test_rejected_changes_nothing(router):
    outcome = await router.dispatch("hello", BOOTING, Settings())
    assert outcome.intent is Intent.REJECTED
    assert outcome.reply is None
    assert outcome.state == BOOTING


async def test_clear_resets_selection(router, three_models):
    outcome = await router.dispatch("cls", awaiting(three_models), Settings())
    assert outcome.clear is True
    assert outcome.reply is None
    assert outcome.state.awaiting_model_selection is False


async def test_open_settings(router):
    outcome = await router.dispatch("settings", IDLE, Settings())
    assert outcome.open_settings is True
    assert outcome.reply == SETTINGS_ACK
    assert outcome.interval_ms == 20


async def test_list_models(router, gateway, three_models):
    gateway.models = three_models
    outcome = await router.dispatch("show models", IDLE, Settings())
    assert outcome.reply == (
        "AVAILABLE NEURAL MODELS:\n"
        "[0] llama3.1:8b (4.92GB)\n"
        "[1] mistral:7b (4.11GB)\n"
        "[2] phi3:mini (2.20GB)\n"
        "\n"
        "ENTER SELECTION NUMBER:"
    )
    assert outcome.state.awaiting_model_selection is True
    assert outcome.state.available_models == three_models
    assert gateway.model_requests == 1


async def test_list_models_empty(router, gateway):
    outcome = await router.dispatch("list models", IDLE, Settings())
    assert outcome.reply == NO_MODELS
    assert outcome.state.awaiting_model_selection is False


async def test_select_model_valid(router, three_models):
    outcome = await router.dispatch("1", awaiting(three_models), Settings())
    assert outcome.reply == "MODEL UPDATED: MISTRAL:7B. NEURAL PROTOCOLS RECONFIGURED."
    assert outcome.settings_update == {"current_model": "mistral:7b"}
    assert outcome.state.awaiting_model_selection is False


@pytest.mark.parametrize("text", ["9", "3", "-1"])
async def test_select_model_out_of_range(router, three_models, text):
    outcome = await router.dispatch(text, awaiting(three_models), Settings())
    assert outcome.reply == INVALID_SELECTION
    assert outcome.settings_update == {}
    assert outcome.state.awaiting_model_selection is False


async def test_other_input_cancels_selection(router, three_models):
    outcome = await router.dispatch("/wiki", awaiting(three_models), Settings())
    assert outcome.intent is Intent.REFERENCE
    assert outcome.state.awaiting_model_selection is False


async def test_reference_single_hit_is_a_sheet(router):
    outcome = await router.dispatch("/planets lv-426", IDLE, Settings())
    assert outcome.reply.startswith("PLANETARY RECORD: LV-426 (ACHERON)")
    assert outcome.delay_ms == 0


async def test_reference_no_hit(router):
    outcome = await router.dispatch("/planets nonexistent-world", IDLE, Settings())
    assert outcome.reply == 'NO DATA FOUND FOR "NONEXISTENT-WORLD" IN PLANETARY DATABASE.'


async def test_reference_no_query_lists_all(router):
    outcome = await router.dispatch("/aliens", IDLE, Settings())
    assert outcome.reply.startswith("3 XENOBIOLOGY RECORDS FOUND:")


async def test_reference_prefix_case_insensitive(router):
    outcome = await router.dispatch("/ALIENS xenomorph", IDLE, Settings())
    assert outcome.reply.startswith("XENOBIOLOGY RECORD: XENOMORPH XX121")


@pytest.mark.parametrize("text", ["/wiki", "/wiki help", "/WIKI HELP"])
async def test_wiki_help(router, text):
    outcome = await router.dispatch(text, IDLE, Settings())
    assert outcome.reply.startswith("WEYLAND-YUTANI REFERENCE DATABASE")
    assert "RECORDS ON FILE:" in outcome.reply


async def test_wiki_query_searches_everything(router):
    outcome = await router.dispatch("/wiki weyland", IDLE, Settings())
    assert "RECORDS FOUND ACROSS ALL DATABASES:" in outcome.reply


async def test_unknown_command(router, gateway):
    outcome = await router.dispatch("/foo bar", IDLE, Settings())
    assert outcome.reply == "UNRECOGNIZED COMMAND: /FOO. TYPE /WIKI HELP FOR AVAILABLE QUERIES."
    assert gateway.sent == []


async def test_chat_reply_has_latency(router, gateway):
    gateway.reply = ProviderReply(content="CREW EXPENDABLE.")
    outcome = await router.dispatch("what is special order 937?", IDLE, Settings())
    assert gateway.sent == ["what is special order 937?"]
    assert outcome.reply == "CREW EXPENDABLE."
    assert outcome.delay_ms == REPLY_LATENCY_MS


async def test_chat_provider_error_text(router, gateway):
    gateway.reply = ProviderReply(error="Cannot connect to Ollama at http://localhost:11434")
    outcome = await router.dispatch("hello", IDLE, Settings())
    assert outcome.reply == "Cannot connect to Ollama at http://localhost:11434"


async def test_chat_empty_reply(router, gateway):
    gateway.reply = ProviderReply()
    outcome = await router.dispatch("hello", IDLE, Settings())
    assert outcome.reply == INTERFACE_ERROR


async def test_chat_gateway_exception(router, gateway):
    gateway.exc = RuntimeError("socket closed")
    outcome = await router.dispatch("hello", IDLE, Settings())
    assert outcome.reply == "COMMUNICATION ERROR: socket closed. CHECK LOGS FOR DETAILS."
    assert outcome.delay_ms == 0


async def test_integer_without_listing_goes_to_chat(router, gateway):
    outcome = await router.dispatch("2", IDLE, Settings())
    assert outcome.intent is Intent.CHAT
    assert gateway.sent == ["2"]

"""
Tests for the service layer and its pydantic contract.
"""

import pytest
from pydantic import ValidationError

from ..api import (
    ErrorCode,
    ErrorResponse,
    EventInfo,
    GameService,
    IntentKind,
    IntentRequest,
    MatchConfigRequest,
    MatchSnapshot,
    SuggestRequest,
)
from ..engine_core.events import MoveTaken
from ..engine_core.state import (
    MAX_PILE_SIZE,
    MAX_PILES,
    BoardSize,
    Difficulty,
    EndReason,
    GameMode,
    TimeControl,
)
from ..session import LoopState


@pytest.fixture
def service(instant_settings) -> GameService:
    return GameService(settings=instant_settings)


def untimed_hard(seed=3) -> MatchConfigRequest:
    return MatchConfigRequest(
        board_size="small", opponent="cpu_hard", time_control=None, random_seed=seed,
    )


class TestStartMatch:
    """Tests for match creation through the service."""

    def test_snapshot_of_new_match(self, service):
        snapshot = service.start_match(untimed_hard())

        assert snapshot.loop_state == LoopState.WAITING_HUMAN
        assert len(snapshot.piles) == 3
        assert all(1 <= p <= 5 for p in snapshot.piles)
        assert snapshot.mode == GameMode.VS_CPU
        assert snapshot.difficulty == Difficulty.HARD
        assert snapshot.board_size == BoardSize.SMALL
        assert snapshot.clocks == [0, 0]
        assert not snapshot.clock_running
        assert snapshot.outcome is None

    def test_seed_reproduces_piles(self, instant_settings):
        a = GameService(settings=instant_settings).start_match(untimed_hard(seed=42))
        b = GameService(settings=instant_settings).start_match(untimed_hard(seed=42))
        assert a.piles == b.piles

    def test_request_defaults(self):
        config = MatchConfigRequest().to_config()
        assert config.board_size == BoardSize.MEDIUM
        assert config.mode == GameMode.VS_CPU
        assert config.difficulty == Difficulty.NORMAL
        assert config.time_control == TimeControl.BLITZ

    def test_snapshot_is_read_only(self, service):
        snapshot = service.start_match(untimed_hard())
        with pytest.raises(ValidationError):
            snapshot.active_player = 1


class TestIntentsAndTicks:
    """Tests for driving a match through the service."""

    def test_confirm_reports_events(self, service):
        service.start_match(untimed_hard())
        step = service.send_intent(IntentRequest(kind=IntentKind.CONFIRM_MOVE))

        assert step.accepted
        assert step.snapshot.loop_state == LoopState.ANIMATING
        assert step.events[0].kind == "move_taken"
        assert step.events[0].mover == 0
        assert step.events[1].kind == "stone_removed"

    def test_rejected_intent(self, service):
        service.start_match(untimed_hard())
        service.send_intent(IntentRequest(kind="confirm_move"))

        step = service.send_intent(IntentRequest(kind="select_pile", delta=1))
        assert not step.accepted
        assert step.errors

    def test_ticks_run_cpu_reply(self, service):
        service.start_match(untimed_hard())
        service.send_intent(IntentRequest(kind="confirm_move"))

        states = [service.tick(0).snapshot.loop_state for _ in range(3)]
        assert states == [LoopState.CPU_THINKING, LoopState.ANIMATING, LoopState.WAITING_HUMAN]

    def test_timeout_through_service(self, service):
        service.start_match(MatchConfigRequest(opponent="cpu_easy", time_control="bullet"))

        step = service.tick(15_000)
        assert step.snapshot.outcome.winner == 1
        assert step.snapshot.outcome.reason == EndReason.TIMEOUT
        assert step.events[-1].kind == "match_decided"

        after = service.tick(16)
        assert after.accepted
        assert after.snapshot.loop_state == LoopState.GAME_OVER
        assert after.events == []

    def test_no_match_running(self, service):
        for response in (
            service.send_intent(IntentRequest(kind="confirm_move")),
            service.tick(16),
            service.snapshot(),
        ):
            assert isinstance(response, ErrorResponse)
            assert response.error_code == ErrorCode.NO_MATCH

    def test_return_to_menu(self, service):
        service.start_match(untimed_hard())
        service.return_to_menu()
        assert isinstance(service.snapshot(), ErrorResponse)


class TestSuggest:
    """Tests for move suggestions."""

    def test_hard_suggestion(self, service):
        response = service.suggest(SuggestRequest(piles=[1, 2, 3]))
        assert response.pile_index == 0
        assert response.amount == 1
        assert response.nim_sum == 0

    def test_winning_suggestion(self, service):
        response = service.suggest(SuggestRequest(piles=[3, 4, 5]))
        assert (response.pile_index, response.amount) == (0, 2)
        assert response.nim_sum == 2

    def test_sampled_tier_takes_last_stones(self, service):
        request = SuggestRequest(piles=[0, 0, 5], difficulty="easy", random_seed=1)
        response = service.suggest(request)
        assert (response.pile_index, response.amount) == (2, 5)

    def test_empty_board(self, service):
        response = service.suggest(SuggestRequest(piles=[0, 0]))
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.EMPTY_BOARD


class TestSchemas:
    """Validation at the service boundary."""

    def test_negative_pile_rejected(self):
        with pytest.raises(ValidationError):
            SuggestRequest(piles=[3, -1])

    def test_oversized_pile_rejected(self):
        """Piles beyond the large board's stone range are refused."""
        SuggestRequest(piles=[MAX_PILE_SIZE, 1])
        with pytest.raises(ValidationError):
            SuggestRequest(piles=[MAX_PILE_SIZE + 1, 1], difficulty="normal")
        with pytest.raises(ValidationError):
            SuggestRequest(piles=[10**12], difficulty="easy")

    def test_too_many_piles_rejected(self):
        SuggestRequest(piles=[1] * MAX_PILES)
        with pytest.raises(ValidationError):
            SuggestRequest(piles=[1] * (MAX_PILES + 1))

    def test_empty_pile_list_rejected(self):
        with pytest.raises(ValidationError):
            SuggestRequest(piles=[])

    def test_delta_bounds(self):
        with pytest.raises(ValidationError):
            IntentRequest(kind="adjust_amount", delta=2)

    def test_unknown_opponent_rejected(self):
        with pytest.raises(ValidationError):
            MatchConfigRequest(opponent="grandmaster")

    def test_event_info_from_event(self):
        info = EventInfo.from_event(MoveTaken(pile_index=2, amount=3, mover=1))
        assert info.kind == "move_taken"
        assert (info.pile_index, info.amount, info.mover) == (2, 3, 1)
        assert info.winner is None

    def test_snapshot_json(self, service):
        snapshot = service.start_match(untimed_hard())
        data = snapshot.model_dump(mode="json")
        assert data["mode"] == "vs_cpu"
        assert data["loop_state"] == "waiting_human"
        assert MatchSnapshot.model_validate(data) == snapshot

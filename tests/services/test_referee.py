"""Tests for src/services/referee.py, with scripted connections in place of the move servers"""

from unittest.mock import patch

import pytest

from src.core.config import AgentAddress, RefereeConfig
from src.core.exceptions import TransportError
from src.core.shared_types import SessionState, Status
from src.quoridor.position import Position
from src.services.referee import Referee, start_referee
from tests.utils.fakes import ScriptedConnection

# Alice walks straight down column V. Bob steps aside and back, so he is never in her way.
ALICE_MOVES = ["V-B", "V-C", "V-D", "V-E", "V-F", "V-G", "V-H", "V-I"]
BOB_MOVES = ["IV-I", "V-I", "IV-I", "V-I", "IV-I", "V-I", "IV-I"]


@pytest.fixture
def race() -> tuple[Referee, ScriptedConnection, ScriptedConnection]:
    alice = ScriptedConnection(ALICE_MOVES)
    bob = ScriptedConnection(BOB_MOVES)
    return Referee({"Alice": alice, "Bob": bob}), alice, bob


def test_full_game(race: tuple[Referee, ScriptedConnection, ScriptedConnection]) -> None:
    referee, alice, bob = race
    assert referee.state == SessionState.AWAIT_ROSTER

    winner = referee.run()

    assert winner.name == "Alice"
    assert referee.game.status == Status.FINISHED
    assert referee.game.board.locations == {"Alice": Position(4, 8), "Bob": Position(3, 8)}
    assert referee.state == SessionState.CLOSED
    assert alice.closed and bob.closed
    assert alice.sent[-1] == bob.sent[-1] == "VICTOR Alice"


def test_message_order(race: tuple[Referee, ScriptedConnection, ScriptedConnection]) -> None:
    """Roster first, GO? only to the player whose turn it is, every move broadcast to everyone"""
    referee, alice, bob = race
    referee.run()

    assert alice.sent[:6] == [
        "PLAYERS Alice Bob",
        "GO?",
        "WENT Alice V-B",
        "WENT Bob IV-I",
        "GO?",
        "WENT Alice V-C",
    ]
    assert bob.sent[:5] == [
        "PLAYERS Alice Bob",
        "WENT Alice V-B",
        "GO?",
        "WENT Bob IV-I",
        "WENT Alice V-C",
    ]
    assert alice.sent.count("GO?") == len(ALICE_MOVES)
    assert bob.sent.count("GO?") == len(BOB_MOVES)
    # every WENT went to both
    assert [line for line in alice.sent if line.startswith("WENT")] == [
        line for line in bob.sent if line.startswith("WENT")
    ]
    assert referee.game.moves == [move for pair in zip(ALICE_MOVES, BOB_MOVES) for move in pair] + ["V-I"]


def test_illegal_move_boots() -> None:
    alice = ScriptedConnection(["V-D"])
    bob = ScriptedConnection([])
    winner = Referee({"Alice": alice, "Bob": bob}).run()

    assert winner.name == "Bob"
    assert alice.sent == ["PLAYERS Alice Bob", "GO?", "BOOT Alice"]
    assert bob.sent == ["PLAYERS Alice Bob", "BOOT Alice", "VICTOR Bob"]
    assert alice.closed


@pytest.mark.parametrize(
    "bob",
    [
        ScriptedConnection([]),  # hung up
        ScriptedConnection(["V-H"], fail_on_receive=True),  # timed out
        ScriptedConnection(["garbage"]),
        ScriptedConnection([""]),
    ],
)
def test_no_legal_answer_boots(bob: ScriptedConnection) -> None:
    alice = ScriptedConnection(["V-B"])
    carol = ScriptedConnection([])
    referee = Referee({"Alice": alice, "Bob": bob, "Carol": carol})

    referee.play_turn()
    assert referee.play_turn() is None

    assert [player.name for player in referee.game.players] == ["Carol", "Alice"]
    assert "Bob" not in referee.connections
    assert bob.closed
    assert bob.sent[-1] == "BOOT Bob"
    assert carol.sent == ["WENT Alice V-B", "BOOT Bob"]


def test_last_player_standing() -> None:
    alice = ScriptedConnection(["V-D"])
    bob = ScriptedConnection(fail_on_receive=True)
    carol = ScriptedConnection([])
    winner = Referee({"Alice": alice, "Bob": bob, "Carol": carol}).run()

    assert winner.name == "Carol"
    assert carol.sent == [
        "PLAYERS Alice Bob Carol",
        "BOOT Alice",
        "BOOT Bob",
        "VICTOR Carol",
    ]
    assert bob.sent == ["PLAYERS Alice Bob Carol", "BOOT Alice", "GO?", "BOOT Bob"]


def test_unreachable_listener_is_not_fatal() -> None:
    """A failed broadcast is only logged. The player gets booted once it is their turn."""
    alice = ScriptedConnection(["V-B"])
    bob = ScriptedConnection(["V-H"])
    bob.close()
    winner = Referee({"Alice": alice, "Bob": bob}).run()

    assert winner.name == "Alice"
    assert bob.sent == []
    assert alice.sent == ["PLAYERS Alice Bob", "GO?", "WENT Alice V-B", "BOOT Bob", "VICTOR Alice"]


def test_turn_delay() -> None:
    alice = ScriptedConnection(["V-D"])
    bob = ScriptedConnection(fail_on_receive=True)
    carol = ScriptedConnection([])
    with patch("src.services.referee.time.sleep") as sleep:
        Referee({"Alice": alice, "Bob": bob, "Carol": carol}, turn_delay=0.2).run()

    # only in between turns, not after the last one
    sleep.assert_called_once_with(0.2)


# -- START-UP --
@pytest.fixture
def config() -> RefereeConfig:
    return RefereeConfig(
        agents=[AgentAddress.parse("localhost:5000"), AgentAddress.parse("localhost:5001")],
        names=["Alice", "Bob"],
        move_timeout=3.0,
    )


def test_start_referee(config: RefereeConfig) -> None:
    alice = ScriptedConnection(ALICE_MOVES)
    bob = ScriptedConnection(BOB_MOVES)
    with patch("src.services.referee.connect", side_effect=[alice, bob]) as connect:
        winner = start_referee(config)

    assert winner.name == "Alice"
    assert [call.args for call in connect.call_args_list] == [("localhost", 5000), ("localhost", 5001)]
    assert alice.timeout == bob.timeout == 3.0


def test_start_referee_unreachable(config: RefereeConfig) -> None:
    """No game without every move server. The ones already connected get hung up on."""
    alice = ScriptedConnection(ALICE_MOVES)
    with patch(
        "src.services.referee.connect",
        side_effect=[alice, TransportError("Could not connect to localhost:5001")],
    ):
        with pytest.raises(TransportError):
            start_referee(config)

    assert alice.closed
    assert alice.sent == []

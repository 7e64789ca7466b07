"""Transport client: outgoing intents and the read-only mirror."""
import pytest

from endless_ttt.client import GameClient


@pytest.fixture
def sent():
    return []


@pytest.fixture
def game_client(sent):
    async def send(payload):
        sent.append(payload)

    return GameClient(send)


@pytest.mark.asyncio
async def test_intents(game_client, sent):
    await game_client.create_game("Alice")
    await game_client.make_move(3)  # no game yet, nothing sent
    game_client.handle({"type": "game-created", "gameId": "abc123", "isHost": True,
                        "playerSymbol": "X", "playerName": "Alice"})
    await game_client.make_move(3)
    await game_client.reset_game()
    await game_client.reset_scores()
    assert sent == [
        {"type": "create-game", "playerName": "Alice"},
        {"type": "make-move", "gameId": "abc123", "index": 3},
        {"type": "reset-game", "gameId": "abc123"},
        {"type": "reset-scores", "gameId": "abc123"},
    ]


@pytest.mark.asyncio
async def test_guest_does_not_send_resets(game_client, sent):
    await game_client.join_game("abc123", "Bob")
    game_client.handle({"type": "game-joined", "gameId": "abc123", "isHost": False,
                        "playerSymbol": "O", "playerName": "Bob", "opponentName": "Alice"})
    await game_client.reset_game()
    await game_client.reset_scores()
    assert sent == [{"type": "join-game", "gameId": "abc123", "playerName": "Bob"}]
    assert game_client.opponent_name == "Alice"
    assert game_client.opponent_connected


def test_mirror_follows_server(game_client):
    game_client.handle({"type": "game-created", "gameId": "g", "isHost": True,
                        "playerSymbol": "X", "playerName": "Alice"})
    assert game_client.my_turn
    assert game_client.handle({"type": "opponent-joined", "opponentName": "Bob"}) == "opponent-joined"
    game_client.handle({"type": "move-made", "index": 4, "symbol": "X", "nextTurn": "O",
                        "board": [None] * 4 + ["X"] + [None] * 4})
    assert game_client.board[4] == "X"
    assert not game_client.my_turn

    game_client.handle({"type": "move-made", "index": 2, "symbol": "X", "nextTurn": None,
                        "board": ["X"] * 3 + [None] * 6, "winner": "X", "winnerName": "Alice",
                        "winningLine": [0, 1, 2], "scores": {"X": 1, "O": 0}})
    assert game_client.winner == "X"
    assert game_client.winning_line == [0, 1, 2]
    assert game_client.scores == {"X": 1, "O": 0}

    game_client.handle({"type": "game-reset"})
    assert game_client.board == [None] * 9
    assert game_client.winner is None
    assert game_client.scores == {"X": 1, "O": 0}

    game_client.handle({"type": "scores-reset"})
    assert game_client.scores == {"X": 0, "O": 0}

    game_client.handle({"type": "opponent-disconnected"})
    assert game_client.game_id is None
    assert not game_client.opponent_connected


def test_error_is_recorded(game_client):
    game_client.handle({"type": "error", "message": "Game is full"})
    assert game_client.last_error == "Game is full"
    assert game_client.game_id is None

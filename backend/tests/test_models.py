from models import Game, GameStatus


def test_game_defaults() -> None:
    game = Game(game_id="g1", first_user_id="u1")
    assert game.second_user_id == ""
    assert game.state == ""
    assert game.last_move_user_id == ""
    assert game.status is GameStatus.CREATED


def test_game_status_follows_lifecycle() -> None:
    game = Game(game_id="g1", first_user_id="u1")
    game.second_user_id = "u2"
    assert game.status is GameStatus.JOINED

    game.state = "X........"
    game.last_move_user_id = "u1"
    assert game.status is GameStatus.IN_PROGRESS

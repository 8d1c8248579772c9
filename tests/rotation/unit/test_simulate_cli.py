import pytest

from sketchparty.tools.simulate import main


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch) -> None:
    for name in (
        "SKETCHPARTY_SIM_PLAYERS",
        "SKETCHPARTY_SIM_TARGET_GAMES",
        "SKETCHPARTY_SIM_SEASON_ID",
        "SKETCHPARTY_SIM_SEED",
        "SKETCHPARTY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_main_prints_summary_matrix_and_square(capsys) -> None:
    exit_code = main(["--players", "5", "--target-games", "5", "--seed", "3", "--show-matrix", "--show-square"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Games completed: 5/5" in out
    assert "Party status: completed" in out
    assert "Interaction Matrix" in out
    assert "Pairing Analysis" in out


def test_main_reports_missing_square_for_small_party(capsys) -> None:
    exit_code = main(["--players", "3", "--target-games", "3", "--seed", "1", "--show-square"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "game-A: player-A -> player-B -> player-C" in captured.out
    assert "No balanced square for 3 players." in captured.err


def test_main_rejects_invalid_target(capsys) -> None:
    exit_code = main(["--players", "4", "--target-games", "9"])

    assert exit_code == 2
    assert "Invalid simulation arguments" in capsys.readouterr().err


def test_main_uses_environment_defaults(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SKETCHPARTY_SIM_PLAYERS", "4")
    monkeypatch.setenv("SKETCHPARTY_SIM_TARGET_GAMES", "4")
    monkeypatch.setenv("SKETCHPARTY_SIM_SEED", "9")

    exit_code = main([])

    assert exit_code == 0
    assert "Games completed: 4/4" in capsys.readouterr().out

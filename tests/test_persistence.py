import json

from matrix_snake.persistence import SaveData, SaveStore


def test_missing_file_gives_defaults(tmp_path):
    data = SaveStore(tmp_path / "nope.json").load()
    assert data == SaveData()
    assert data.last_seed is None
    assert data.sound_volume == 1.0


def test_update_keeps_other_fields(tmp_path):
    store = SaveStore(tmp_path / "nested" / "save.json")
    store.update(best_score=12)
    store.update(last_seed=2**64 - 1, last_move_interval_ms=80)
    data = store.load()
    assert data.best_score == 12
    assert data.last_seed == 2**64 - 1
    assert data.last_move_interval_ms == 80
    assert data.last_wall_density is None


def test_corrupt_file_warns_and_defaults(tmp_path, capsys):
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    assert SaveStore(path).load() == SaveData()
    assert "[WARN]" in capsys.readouterr().out


def test_non_object_json_is_ignored(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert SaveStore(path).load() == SaveData()


def test_values_are_sanitised(tmp_path):
    path = tmp_path / "save.json"
    path.write_text(json.dumps({"best_score": -4, "sound_volume": 3.0, "extra": 1}), encoding="utf-8")
    data = SaveStore(path).load()
    assert data.best_score == 0
    assert data.sound_volume == 1.0


def test_write_failure_warns(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = SaveStore(blocker / "save.json")
    assert store.write(SaveData(best_score=1)) is False
    assert "[WARN]" in capsys.readouterr().out


def test_out_of_range_seed_is_dropped(tmp_path):
    path = tmp_path / "save.json"
    for bad in (-1, 2**64):
        path.write_text(json.dumps({"last_seed": bad, "best_score": 3}), encoding="utf-8")
        data = SaveStore(path).load()
        assert data.last_seed is None
        assert data.best_score == 3


def test_out_of_range_seed_does_not_block_session(tmp_path):
    from matrix_snake.config import GameConfig
    from matrix_snake.screens import GameSession

    path = tmp_path / "save.json"
    path.write_text(json.dumps({"last_seed": 2**64}), encoding="utf-8")
    session = GameSession(GameConfig(), SaveStore(path))
    assert 0 <= session.lobby.seed < 2**64


def test_infinite_numbers_warn_and_default(tmp_path, capsys):
    path = tmp_path / "save.json"
    for key in ("best_score", "last_move_interval_ms"):
        path.write_text('{"%s": Infinity}' % key, encoding="utf-8")
        assert SaveStore(path).load() == SaveData()
        assert "[WARN]" in capsys.readouterr().out

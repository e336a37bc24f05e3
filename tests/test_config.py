from menu_cards.config import env_float


def test_env_float_reads_valid_values(monkeypatch):
    monkeypatch.setenv("MENU_CARDS_FETCH_TIMEOUT", " 2.5 ")
    assert env_float("MENU_CARDS_FETCH_TIMEOUT", 5.0) == 2.5


def test_env_float_keeps_default_on_missing_or_bad_values(monkeypatch):
    monkeypatch.delenv("MENU_CARDS_FETCH_TIMEOUT", raising=False)
    assert env_float("MENU_CARDS_FETCH_TIMEOUT", 5.0) == 5.0

    for raw in ("soon", "nan", "-1", "0"):
        monkeypatch.setenv("MENU_CARDS_FETCH_TIMEOUT", raw)
        assert env_float("MENU_CARDS_FETCH_TIMEOUT", 5.0) == 5.0

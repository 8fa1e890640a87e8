from pathlib import Path

from gridsearch.settings import EDITABLE_FIELDS, Settings, get_editable_settings, update_settings


def _fresh_settings() -> Settings:
    """Create a fresh Settings instance for testing."""
    return Settings()


def test_defaults(monkeypatch):
    for name in ("GRID_SIZE", "MIN_WORD_LENGTH", "MAX_WORD_LENGTH", "NOTIFY", "DICTIONARY_SOURCE"):
        monkeypatch.delenv(name, raising=False)
    cfg = _fresh_settings()
    assert cfg.GRID_SIZE == 4
    assert cfg.MIN_WORD_LENGTH == 4
    assert cfg.MAX_WORD_LENGTH == 8
    assert cfg.NOTIFY is False
    assert cfg.DICTIONARY_SOURCE.endswith("words.txt")


def test_environment_override(monkeypatch):
    monkeypatch.setenv("MIN_WORD_LENGTH", "3")
    monkeypatch.setenv("NOTIFY", "yes")
    monkeypatch.setenv("DICTIONARY_TIMEOUT", "2.5")
    monkeypatch.setenv("DICTIONARY_SOURCE", "https://example.com/words.txt")
    monkeypatch.setenv("DEBUG_DIR", "/tmp/gridsearch-debug")
    cfg = _fresh_settings()
    assert cfg.MIN_WORD_LENGTH == 3
    assert cfg.NOTIFY is True
    assert cfg.DICTIONARY_TIMEOUT == 2.5
    assert cfg.DICTIONARY_SOURCE == "https://example.com/words.txt"
    assert cfg.DEBUG_DIR == Path("/tmp/gridsearch-debug")


def test_editable_fields_exist_on_settings():
    """All editable fields must be actual attributes on Settings."""
    cfg = _fresh_settings()
    for field_name in EDITABLE_FIELDS:
        assert hasattr(cfg, field_name), f"{field_name} not found on Settings"


def test_get_editable_settings():
    cfg = _fresh_settings()
    result = get_editable_settings(cfg)
    assert set(result.keys()) == set(EDITABLE_FIELDS.keys())
    assert result["MIN_WORD_LENGTH"] == cfg.MIN_WORD_LENGTH
    assert result["GRID_SIZE"] == cfg.GRID_SIZE


def test_update_int_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NOTIFY_WORDS_PER_GROUP=7)
    assert errors == {}
    assert cfg.NOTIFY_WORDS_PER_GROUP == 7


def test_update_int_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, GRID_SIZE="5")
    assert errors == {}
    assert cfg.GRID_SIZE == 5


def test_update_bool_field():
    cfg = _fresh_settings()
    original = cfg.DEBUG
    errors = update_settings(cfg, DEBUG=not original)
    assert errors == {}
    assert cfg.DEBUG is (not original)


def test_update_bool_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NOTIFY="true")
    assert errors == {}
    assert cfg.NOTIFY is True

    errors = update_settings(cfg, NOTIFY="false")
    assert errors == {}
    assert cfg.NOTIFY is False


def test_update_string_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NTFY_TOPIC="test-topic")
    assert errors == {}
    assert cfg.NTFY_TOPIC == "test-topic"


def test_update_multiple_fields():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH=3, MAX_WORD_LENGTH=6, NTFY_TOPIC="multi")
    assert errors == {}
    assert cfg.MIN_WORD_LENGTH == 3
    assert cfg.MAX_WORD_LENGTH == 6
    assert cfg.NTFY_TOPIC == "multi"


def test_update_non_editable_field_returns_error():
    cfg = _fresh_settings()
    original = cfg.PORT
    errors = update_settings(cfg, PORT=original + 1)
    assert "PORT" in errors
    assert cfg.PORT == original


def test_update_unknown_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NONEXISTENT_FIELD=42)
    assert "NONEXISTENT_FIELD" in errors


def test_update_invalid_value_returns_error():
    cfg = _fresh_settings()
    original = cfg.GRID_SIZE
    errors = update_settings(cfg, GRID_SIZE="four")
    assert "GRID_SIZE" in errors
    assert cfg.GRID_SIZE == original

    errors = update_settings(cfg, GRID_SIZE=True)
    assert "GRID_SIZE" in errors


def test_update_non_positive_length_rejected():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH=0)
    assert "MIN_WORD_LENGTH" in errors
    assert cfg.MIN_WORD_LENGTH == 4


def test_update_min_above_max_rejected():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH=9)
    assert "MIN_WORD_LENGTH" in errors
    assert cfg.MIN_WORD_LENGTH == 4

    errors = update_settings(cfg, MIN_WORD_LENGTH=6, MAX_WORD_LENGTH=5)
    assert set(errors) == {"MIN_WORD_LENGTH", "MAX_WORD_LENGTH"}
    assert (cfg.MIN_WORD_LENGTH, cfg.MAX_WORD_LENGTH) == (4, 8)


def test_update_partial_error():
    """Valid fields update even when invalid fields are present."""
    cfg = _fresh_settings()
    errors = update_settings(cfg, GRID_SIZE=5, BAD_FIELD="nope")
    assert "BAD_FIELD" in errors
    assert cfg.GRID_SIZE == 5


def test_update_fractional_int_rejected():
    cfg = _fresh_settings()
    original = cfg.MIN_WORD_LENGTH
    errors = update_settings(cfg, MIN_WORD_LENGTH=4.9)
    assert "MIN_WORD_LENGTH" in errors
    assert cfg.MIN_WORD_LENGTH == original

    errors = update_settings(cfg, MIN_WORD_LENGTH=3.0)
    assert errors == {}
    assert cfg.MIN_WORD_LENGTH == 3

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_SOURCE: str = field(init=False)
    DEBUG_DIR: Path = field(init=False)

    NTFY_TOPIC: str = "grid-search"
    NTFY_URL: str = "https://ntfy.sh"
    NOTIFY: bool = False
    NOTIFY_WORDS_PER_GROUP: int = 10

    GRID_SIZE: int = 4
    MIN_WORD_LENGTH: int = 4
    MAX_WORD_LENGTH: int = 8

    DICTIONARY_TIMEOUT: float = 10.0
    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_SOURCE = str(self.BASE_DIR / "words.txt")
        self.DEBUG_DIR = self.BASE_DIR / "debug"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(type(getattr(self, fld)), env_val))


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "GRID_SIZE": int,
    "MIN_WORD_LENGTH": int,
    "MAX_WORD_LENGTH": int,
    "NOTIFY": bool,
    "NOTIFY_WORDS_PER_GROUP": int,
    "NTFY_TOPIC": str,
    "DEBUG": bool,
}

_POSITIVE_INT_FIELDS = ("GRID_SIZE", "MIN_WORD_LENGTH", "MAX_WORD_LENGTH", "NOTIFY_WORDS_PER_GROUP")


def _coerce(kind: type, value):
    if issubclass(kind, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes")
    if issubclass(kind, Path):
        return Path(value)
    if isinstance(value, bool) and kind in (int, float):
        raise ValueError("expected a number, got a boolean")
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ValueError("expected a whole number")
    return kind(value)


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **updates) -> dict[str, str]:
    """Apply editable updates in place. Returns {field: error} for rejected ones.

    Valid fields are applied even when others in the same call are rejected.
    """
    errors: dict[str, str] = {}
    accepted = {}

    for name, value in updates.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "field is not editable"
            else:
                errors[name] = "unknown field"
            continue
        try:
            coerced = _coerce(EDITABLE_FIELDS[name], value)
        except (TypeError, ValueError) as e:
            errors[name] = f"invalid value {value!r}: {e}"
            continue
        if name in _POSITIVE_INT_FIELDS and coerced < 1:
            errors[name] = "must be a positive integer"
            continue
        accepted[name] = coerced

    min_len = accepted.get("MIN_WORD_LENGTH", cfg.MIN_WORD_LENGTH)
    max_len = accepted.get("MAX_WORD_LENGTH", cfg.MAX_WORD_LENGTH)
    if min_len > max_len:
        for name in ("MIN_WORD_LENGTH", "MAX_WORD_LENGTH"):
            if name in accepted:
                del accepted[name]
                errors[name] = f"MIN_WORD_LENGTH ({min_len}) must not exceed MAX_WORD_LENGTH ({max_len})"

    for name, value in accepted.items():
        setattr(cfg, name, value)
    return errors


settings = Settings()

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "sjis.ini"

# Look-alikes that Shift-JIS only has under a different code point.
DEFAULT_REPLACE_RULES: dict[str, str] = {
    "·": "・",
    "—": "―",
    "〜": "～",
    "−": "－",
    "‖": "∥",
    "¢": "￠",
    "£": "￡",
    "¬": "￢",
}


@dataclass(frozen=True)
class ConvertConfig:
    lossy: bool = False
    pattern: str = "*.txt"
    replace: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REPLACE_RULES))


def apply_replace_rules(t: str, rules: dict[str, str] | None = None) -> str:
    r = DEFAULT_REPLACE_RULES if rules is None else rules
    if not r:
        return t
    return "".join(r.get(ch, ch) for ch in t)


def load_config(ini_path: Path) -> ConvertConfig:
    if not ini_path.exists():
        return ConvertConfig()

    cfg = configparser.ConfigParser(interpolation=None)
    cfg.optionxform = str
    try:
        cfg.read(ini_path, encoding="utf-8")
    except configparser.Error as e:
        raise ValueError(f"{ini_path.name}: {e}") from None

    try:
        lossy = cfg.getboolean("options", "lossy", fallback=False)
    except ValueError:
        raise ValueError(f"{ini_path.name}: [options] lossy must be true/false") from None

    pattern = cfg.get("options", "pattern", fallback="*.txt").strip()
    if not pattern:
        raise ValueError(f"{ini_path.name}: [options] pattern is empty")

    if cfg.has_section("replace"):
        replace: dict[str, str] = {}
        for k, v in cfg.items("replace"):
            if len(k) != 1:
                raise ValueError(f"{ini_path.name}: [replace] key must be one character: {k!r}")
            replace[k] = v
    else:
        replace = dict(DEFAULT_REPLACE_RULES)

    return ConvertConfig(lossy=lossy, pattern=pattern, replace=replace)


def write_template(ini_path: Path) -> None:
    ini_path.write_text(
        "\n".join(
            [
                "[options]",
                "; true: unencodable characters become ・, bad bytes become U+FFFD",
                "lossy = false",
                "; glob used when a directory is given",
                "pattern = *.txt",
                "",
                "[replace]",
                "; applied before encoding, one character per key",
                *(f"{k} = {v}" for k, v in DEFAULT_REPLACE_RULES.items()),
                "",
            ]
        ),
        encoding="utf-8",
    )

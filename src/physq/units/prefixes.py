# physq/units/prefixes.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Prefix:
    symbol: str
    factor: float
    name: str


PREFIXES: tuple[Prefix, ...] = (
    # SI decimal prefixes
    Prefix("y",  1e-24, "yocto"),
    Prefix("z",  1e-21, "zepto"),
    Prefix("a",  1e-18, "atto"),
    Prefix("f",  1e-15, "femto"),
    Prefix("p",  1e-12, "pico"),
    Prefix("n",  1e-9,  "nano"),
    Prefix("u",  1e-6,  "micro"),   # ASCII spelling
    Prefix("µ",  1e-6,  "micro"),
    Prefix("m",  1e-3,  "milli"),
    Prefix("c",  1e-2,  "centi"),
    Prefix("d",  1e-1,  "deci"),
    Prefix("da", 1e1,   "deca"),
    Prefix("h",  1e2,   "hecto"),
    Prefix("k",  1e3,   "kilo"),
    Prefix("M",  1e6,   "mega"),
    Prefix("G",  1e9,   "giga"),
    Prefix("T",  1e12,  "tera"),
    Prefix("P",  1e15,  "peta"),
    Prefix("E",  1e18,  "exa"),
    Prefix("Z",  1e21,  "zetta"),
    Prefix("Y",  1e24,  "yotta"),

    # IEC binary prefixes (information units)
    Prefix("Ki", 2.0**10, "kibi"),
    Prefix("Mi", 2.0**20, "mebi"),
    Prefix("Gi", 2.0**30, "gibi"),
    Prefix("Ti", 2.0**40, "tebi"),
    Prefix("Pi", 2.0**50, "pebi"),
    Prefix("Ei", 2.0**60, "exbi"),
    Prefix("Zi", 2.0**70, "zebi"),
    Prefix("Yi", 2.0**80, "yobi"),
)

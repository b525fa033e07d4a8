"""
physq.units.definitions
=======================

The default unit table loaded into ``DEFAULT_REGISTRY``.

Every entry is ``(symbol, scale, dims)`` or ``(symbol, scale, dims, offset)``
where ``scale`` converts one of the unit into the coherent SI unit of its
dimension and ``offset`` (temperature scales, gauge pressures) is the zero
point expressed in that coherent unit.
"""

from __future__ import annotations

import math

from physq.core.dimensions import (
    CURRENT,
    DIM_0,
    INFORMATION,
    LENGTH,
    LUMINOSITY,
    MASS,
    ROTATION,
    SUBSTANCE,
    TEMPERATURE,
    TIME,
)

# --- Helpful composite dimensions ---
AREA         = LENGTH ** 2
VOLUME       = LENGTH ** 3
VELOCITY     = LENGTH / TIME
ACCELERATION = LENGTH / TIME ** 2
FORCE        = MASS * ACCELERATION                  # N
PRESSURE     = FORCE / AREA                         # Pa
ENERGY       = FORCE * LENGTH                       # J
POWER        = ENERGY / TIME                        # W
CHARGE       = CURRENT * TIME                       # C
VOLTAGE      = POWER / CURRENT                      # V
RESISTANCE   = VOLTAGE / CURRENT                    # ohm
CONDUCTANCE  = CURRENT / VOLTAGE                    # S
CAPACITANCE  = CHARGE / VOLTAGE                     # F
FLUX         = VOLTAGE * TIME                       # Wb
FLUX_DENSITY = FLUX / AREA                          # T (tesla)
INDUCTANCE   = FLUX / CURRENT                       # H
FREQUENCY    = TIME ** -1                           # Hz, Bq
SOLID_ANGLE  = ROTATION ** 2                        # sr
LUMEN        = LUMINOSITY * SOLID_ANGLE             # lm = cd·sr
LUX          = LUMEN / AREA                         # lx
DOSE         = ENERGY / MASS                        # Gy, Sv
CATALYTIC    = SUBSTANCE / TIME                     # kat
VISCOSITY    = PRESSURE * TIME                      # Pa·s
KINEMATIC    = AREA / TIME                          # m²/s

_ATM = 1.01325e5
_DEG_F_SCALE = 5.0 / 9.0

UNITS = (
    # Dimensionless unity; lets "1 / s" parse
    ("1", 1.0, DIM_0),

    # Mass
    ("kg",     1.0,                  MASS),
    ("g",      1e-3,                 MASS),
    ("u",      1.660538782e-27,      MASS),
    ("AMU",    1.660538782e-27,      MASS),
    ("grain",  6.479891e-05,         MASS),
    ("ozm",    2.8349523125e-02,     MASS),
    ("lbm",    4.5359237e-01,        MASS),
    ("stone",  6.35029318,           MASS),
    ("slug",   1.45939029372064e+01, MASS),
    ("sg",     1.45939029372064e+01, MASS),
    ("cwt",    4.5359237e+01,        MASS),
    ("uk_cwt", 5.08023454400000e+01, MASS),
    ("ton",    9.0718474e+02,        MASS),
    ("uk_ton", 1.0160469088e+03,     MASS),
    ("t",      1e3,                  MASS),   # metric tonne

    # Length
    ("m",         1.0,                  LENGTH),
    ("ang",       1e-10,                LENGTH),
    ("picapt",    3.52777777777778e-04, LENGTH),
    ("pica",      4.23333333333333e-03, LENGTH),
    ("in",        2.54e-02,             LENGTH),
    ("ft",        3.048e-01,            LENGTH),
    ("yd",        9.144e-01,            LENGTH),
    ("ell",       1.143,                LENGTH),
    ("mi",        1.609344e+03,         LENGTH),
    ("survey_ft", 1200.0 / 3937.0,      LENGTH),
    ("survey_mi", (1200.0 / 3937.0) * 5280.0, LENGTH),
    ("Nmi",       1.852e+03,            LENGTH),
    ("league",    5.556e+03,            LENGTH),
    ("ly",        9.4607304725808e+15,  LENGTH),
    ("parsec",    3.08567758128155e+16, LENGTH),
    ("au",        1.495978707e+11,      LENGTH),

    # Time
    ("s",           1.0,               TIME),
    ("min",         60.0,              TIME),
    ("hr",          3600.0,            TIME),
    ("day",         86400.0,           TIME),
    ("wk",          7.0 * 86400.0,     TIME),
    ("yr",          3.15576e+07,       TIME),   # Julian year
    ("stellar_day", 8.63764100352e+04, TIME),

    # Temperature (absolute, offset and delta scales)
    ("K",      1.0,          TEMPERATURE),
    ("degC",   1.0,          TEMPERATURE, 273.15),
    ("degF",   _DEG_F_SCALE, TEMPERATURE, 459.67 * _DEG_F_SCALE),
    ("Reau",   1.25,         TEMPERATURE, 273.15),
    ("Ra",     _DEG_F_SCALE, TEMPERATURE),
    ("deltaC", 1.0,          TEMPERATURE),
    ("deltaF", _DEG_F_SCALE, TEMPERATURE),

    # Velocity
    ("mph",   4.4704e-01,           VELOCITY),
    ("kn",    5.14444444444444e-01, VELOCITY),
    ("admkn", 5.14773333333333e-01, VELOCITY),
    ("c",     2.99792458e+08,       VELOCITY),

    # Acceleration
    ("grav", 9.80665, ACCELERATION),
    ("Gal",  1e-2,    ACCELERATION),

    # Pressure (including gauge scales referenced to one standard atmosphere)
    ("Pa",   1.0,                   PRESSURE),
    ("Pa-g", 1.0,                   PRESSURE, _ATM),
    ("mmHg", 1.33322e+02,           PRESSURE),
    ("Torr", 1.33322368421053e+02,  PRESSURE),
    ("psi",  6.89475729316836e+03,  PRESSURE),
    ("psig", 6.89475729316836e+03,  PRESSURE, _ATM),
    ("atm",  _ATM,                  PRESSURE),
    ("bar",  1e5,                   PRESSURE),
    ("inHg", 3.3863886666667e+03,   PRESSURE),
    ("Ba",   1e-1,                  PRESSURE),

    # Force
    ("N",    1.0,                 FORCE),
    ("dyn",  1e-05,               FORCE),
    ("pond", 9.80665e-03,         FORCE),
    ("lbf",  4.4482216152605,     FORCE),
    ("ozf",  2.78013850953781e-01, FORCE),

    # Energy (and torque, which shares its dimensions)
    ("J",     1.0,                  ENERGY),
    ("eV",    1.602176487e-19,      ENERGY),
    ("erg",   1e-07,                ENERGY),
    ("Cal",   4.1868,               ENERGY),
    ("BTU",   1.05505585262e+03,    ENERGY),
    ("Wh",    3.6e+03,              ENERGY),
    ("HPh",   2.68451953769617e+06, ENERGY),
    ("ft-lb", 1.3558179483314,      ENERGY),

    # Power
    ("W",  1.0,                  POWER),
    ("PS", 7.3549875e+02,        POWER),
    ("HP", 7.4569987158227e+02,  POWER),

    # Viscosity
    ("P",  1e-1, VISCOSITY),
    ("St", 1e-4, KINEMATIC),

    # Volume
    ("L",      1e-03,               VOLUME),
    ("tsp",    4.92892159375e-06,   VOLUME),
    ("tspm",   5e-06,               VOLUME),
    ("tbs",    1.478676478125e-05,  VOLUME),
    ("fl_oz",  2.95735295625e-05,   VOLUME),
    ("cup",    2.365882365e-04,     VOLUME),
    ("pt",     4.73176473e-04,      VOLUME),
    ("uk_pt",  5.6826125e-04,       VOLUME),
    ("qt",     9.46352946e-04,      VOLUME),
    ("uk_qt",  1.1365225e-03,       VOLUME),
    ("gal",    3.785411784e-03,     VOLUME),
    ("uk_gal", 4.54609e-03,         VOLUME),
    ("bushel", 3.523907016688e-02,  VOLUME),
    ("barrel", 1.58987294928e-01,   VOLUME),
    ("MTON",   1.13267386368,       VOLUME),
    ("GRT",    2.8316846592,        VOLUME),

    # Area
    ("ar",      1e+02,               AREA),
    ("Morgen",  2.5e+03,             AREA),
    ("acre",    4.04687260987425e+03, AREA),
    ("uk_acre", 4.0468564224e+03,    AREA),
    ("ha",      1e+04,               AREA),

    # Information
    ("bit",  1.0,  INFORMATION),
    ("b",    1.0,  INFORMATION),
    ("byte", 8.0,  INFORMATION),
    ("B",    8.0,  INFORMATION),
    ("word", 16.0, INFORMATION),
    ("baud", 1.0,  INFORMATION / TIME),

    # Electromagnetism
    ("A",   1.0,                CURRENT),
    ("C",   1.0,                CHARGE),
    ("e",   1.602176634e-19,    CHARGE),
    ("V",   1.0,                VOLTAGE),
    ("ohm", 1.0,                RESISTANCE),
    ("S",   1.0,                CONDUCTANCE),
    ("F",   1.0,                CAPACITANCE),
    ("Wb",  1.0,                FLUX),
    ("Mx",  1e-8,               FLUX),
    ("T",   1.0,                FLUX_DENSITY),
    ("Gs",  1e-4,               FLUX_DENSITY),
    ("H",   1.0,                INDUCTANCE),

    # Substance
    ("mol", 1.0, SUBSTANCE),
    ("kat", 1.0, CATALYTIC),

    # Luminosity
    ("cd", 1.0, LUMINOSITY),
    ("lm", 1.0, LUMEN),
    ("lx", 1.0, LUX),

    # Rotation (a real base dimension, not dimensionless)
    ("rad",    1.0,                         ROTATION),
    ("rev",    2.0 * math.pi,               ROTATION),
    ("deg",    math.pi / 180.0,             ROTATION),
    ("arcmin", math.pi / (180.0 * 60.0),    ROTATION),
    ("arcsec", math.pi / (180.0 * 3600.0),  ROTATION),
    ("sr",     1.0,                         SOLID_ANGLE),

    # Frequency and rotational speed
    ("Hz",  1.0,                  FREQUENCY),
    ("Bq",  1.0,                  FREQUENCY),
    ("rpm", 2.0 * math.pi / 60.0, ROTATION / TIME),

    # Radiation dose
    ("Gy", 1.0, DOSE),
    ("Sv", 1.0, DOSE),
)

# alias -> canonical symbol
ALIASES = (
    ("sec",  "s"),
    ("Ω",    "ohm"),
    ("Rank", "Ra"),
    ("degR", "Ra"),
    ("ga",   "Gs"),
    ("us_acre", "acre"),
)

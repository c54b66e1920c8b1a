# services/affinity_engine/definitions.py
# Static definitions shared by the scorer, the compass and the prompt builders.

from enum import Enum
from typing import Dict, Tuple


class Party(str, Enum):
    PP = "PP"
    PSOE = "PSOE"
    VOX = "Vox"
    SUMAR = "Sumar"
    PODEMOS = "Podemos"
    ERC = "ERC"
    JUNTS = "Junts"
    EH_BILDU = "EH Bildu"
    PNV = "PNV"
    BNG = "BNG"
    CC = "CC"
    UPN = "UPN"


STANCE_VALUES: Tuple[int, ...] = (-2, -1, 0, 1, 2)
MAX_STANCE_DISTANCE = 4

MIN_WEIGHT = 0
MAX_WEIGHT = 4
DEFAULT_WEIGHT = 2 # 'Importante'

# Scales the mean per-question axis contribution ([-2, 2]) onto the compass range ([-10, 10])
COMPASS_SCALE = 5

MAX_RADAR_PARTIES = 4
MIN_ANSWERS_PER_TOPIC = 2

USER_COMPASS_LABEL = "Tú"
USER_COMPASS_COLOR = "#EF4444"
USER_COMPASS_SIZE = 250
PARTY_COMPASS_SIZE = 100

# Hand-authored reference positions on the [-10, 10] compass.
# x: economic axis, y: social axis
PARTY_COORDINATES: Dict[Party, Tuple[float, float]] = {
    Party.PP: (5, -4),
    Party.PSOE: (-5, 7),
    Party.VOX: (7, -9),
    Party.SUMAR: (-8, 9),
    Party.PODEMOS: (-9, 8),
    Party.ERC: (-6, 8),
    Party.JUNTS: (3, 0),
    Party.EH_BILDU: (-7, 8),
    Party.PNV: (1, 2),
    Party.BNG: (-7, 7),
    Party.CC: (2, -2),
    Party.UPN: (6, -5),
}

WEIGHT_LABELS: Tuple[str, ...] = (
    "Muy poco importante",
    "Poco importante",
    "Importante",
    "Muy importante",
    "Extremadamente importante",
)

ANSWER_LABELS: Dict[int, str] = {
    2: "Totalmente de acuerdo",
    1: "De acuerdo",
    0: "Neutral",
    -1: "En desacuerdo",
    -2: "Totalmente en desacuerdo",
}

PARTY_STANCE_LABELS: Dict[int, str] = {
    **ANSWER_LABELS,
    0: "Neutral / Postura intermedia",
}

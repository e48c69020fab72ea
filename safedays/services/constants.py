"""
Constants and shared data for cycle-related services.
"""
from typing import Dict, List, Tuple
from safedays.models.phase import CyclePhaseType

# Cycle geometry
DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_DURATION = 5
LUTEAL_PHASE_DAYS = 14  # ovulation sits this many days before the next period
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

# Ledger reconciliation
CORRECTION_WINDOW_DAYS = 5  # reports closer than this amend the last start
MIN_NEW_CYCLE_GAP_DAYS = 10  # closing a cycle requires a gap longer than this

# Recalibration
MIN_PLAUSIBLE_CYCLE_LENGTH = 10  # exclusive
MAX_PLAUSIBLE_CYCLE_LENGTH = 50  # exclusive
RECALIBRATION_WINDOW = 6

# Pregnancy
GESTATION_DAYS = 280
FULL_TERM_WEEKS = 40
SECOND_TRIMESTER_WEEK = 13
THIRD_TRIMESTER_WEEK = 27

PHASE_LABELS: Dict[CyclePhaseType, str] = {
    CyclePhaseType.PERIOD: "Menstruation",
    CyclePhaseType.OVULATION: "Ovulation Day",
    CyclePhaseType.FERTILE: "Fertile Window",
    CyclePhaseType.FOLLICULAR: "Safe Day",
    CyclePhaseType.LUTEAL: "Safe Day",
}

PHASE_BADGES: Dict[CyclePhaseType, str] = {
    CyclePhaseType.PERIOD: "Period Phase",
    CyclePhaseType.FERTILE: "Fertile Window",
    CyclePhaseType.OVULATION: "Ovulation Day",
    CyclePhaseType.LUTEAL: "Safe Phase",
    CyclePhaseType.FOLLICULAR: "Follicular Phase",
}

PHASE_EMOJIS: Dict[CyclePhaseType, str] = {
    CyclePhaseType.PERIOD: "🔴",
    CyclePhaseType.OVULATION: "🔵",
    CyclePhaseType.FERTILE: "🟡",
    CyclePhaseType.FOLLICULAR: "🟢",
    CyclePhaseType.LUTEAL: "🟢",
}

# (weeks below which the size applies, size)
BABY_SIZES: List[Tuple[int, str]] = [
    (4, "Poppy Seed"),
    (8, "Raspberry"),
    (12, "Plum"),
    (16, "Avocado"),
    (20, "Banana"),
    (24, "Ear of Corn"),
    (28, "Eggplant"),
    (32, "Squash"),
    (36, "Honeydew"),
    (40, "Pumpkin"),
]
FULL_TERM_BABY_SIZE = "Watermelon"

"""Tracked gold price instruments (one chart page per instrument)."""

from enum import Enum
from typing import Dict


class Instrument(str, Enum):
    """Instrument identifiers, as used in source URLs, cache keys and API paths."""

    SJC = "sjc"
    DOJI_HN = "doji_hn"
    DOJI_SG = "doji_sg"
    BAO_TIN_MINH_CHAU = "bao_tin_minh_chau"
    PHU_QUY_SJC = "phu_quy_sjc"
    PNJ_TP_HCM = "pnj_tp_hcml"
    PNJ_HN = "pnj_hn"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Shop name shown in notifications."""
        return DISPLAY_NAMES[self]


DISPLAY_NAMES: Dict[Instrument, str] = {
    Instrument.BAO_TIN_MINH_CHAU: "Bảo Tín Minh Châu",
    Instrument.DOJI_HN: "DOJI HN",
    Instrument.DOJI_SG: "DOJI SG",
    Instrument.PHU_QUY_SJC: "Phú Quý SJC",
    Instrument.PNJ_HN: "PNJ HN",
    Instrument.PNJ_TP_HCM: "PNJ TP.HCM",
    Instrument.SJC: "SJC",
}

# Crawl order
ALL_INSTRUMENTS = list(Instrument)

# Notification table order
NOTIFICATION_ORDER = [
    Instrument.BAO_TIN_MINH_CHAU,
    Instrument.DOJI_HN,
    Instrument.DOJI_SG,
    Instrument.PHU_QUY_SJC,
    Instrument.PNJ_HN,
    Instrument.PNJ_TP_HCM,
    Instrument.SJC,
]

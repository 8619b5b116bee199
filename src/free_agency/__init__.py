"""
Free Agency

Weekly market clearing across competing bids, then open free agency for
players left unsigned.

Components:
- models: bids, settings, weekly cycles, player decisions, open-FA signings
- fa_week_manager: bid validation, scoring and weekly clearing
- open_fa_manager: discounted first-come signings
"""

from free_agency.fa_week_manager import FAWeekManager
from free_agency.models import (
    BidStatus,
    FABid,
    FAPhase,
    FAWeek,
    FAWeekEvaluation,
    FAWeekSettings,
    OpenFASigning,
    PlayerDecision,
)
from free_agency.open_fa_manager import OpenFAManager

__all__ = [
    'FAWeekManager',
    'OpenFAManager',
    'FAWeekSettings',
    'FAWeek',
    'FAPhase',
    'FABid',
    'BidStatus',
    'PlayerDecision',
    'FAWeekEvaluation',
    'OpenFASigning',
]

# Application Layer
# =================
# Use cases over the ChatSource abstraction:
# - aggregator:   walk one group's message pages
# - orchestrator: search groups across phone numbers with failure isolation
# - assembler:    shape results into the external JSON payloads

from .aggregator import PageAggregator
from .orchestrator import SearchOrchestrator

__all__ = ["PageAggregator", "SearchOrchestrator"]

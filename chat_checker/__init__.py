# 2Chat Chat Checker - WhatsApp Group History Retrieval
# =====================================================
# Lists the WhatsApp groups of a 2Chat-connected phone number and pulls
# their paginated message history.
#
# ARCHITECTURE LAYERS:
# - Presentation:   FastAPI web API + static UI (web/), CLI (run_cli.py)
# - Application:    Page aggregation and multi-number search orchestration
# - Domain:         Pure data records, title filter, phone validation
# - Infrastructure: 2Chat HTTP client, settings, JSON export
#
# The application layer only talks to the ChatSource abstraction, so the
# 2Chat client can be swapped for another provider (or a fake in tests).

__version__ = "1.0.0"

# Presentation Layer (web)
# ========================
# FastAPI JSON API and the static browser UI under static/.

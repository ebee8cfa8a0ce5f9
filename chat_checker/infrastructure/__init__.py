# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - twochat/: requests-based 2Chat API client
# - export/: JSON export of API payloads to disk
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting domain/application layers.

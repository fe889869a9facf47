"""Service-wide constants."""

SERVICE_NAME = "debtstack-chat"
SQUAD_NAME = "debtstack"

"""Admin password service: weekly override PIN issuance, validation and audit."""

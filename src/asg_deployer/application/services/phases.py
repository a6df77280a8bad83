"""Task phase labels."""

BASE_PHASE = "DEPLOY"

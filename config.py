import logging
import os
from typing import List

# Flat fee added to the subtotal wherever a payable amount is shown or charged.
SERVICE_FEE = int(os.getenv("SERVICE_FEE", "2500"))

# Simulated payment-processing latency for checkout submission.
SUBMIT_DELAY_SECONDS = float(os.getenv("SUBMIT_DELAY_SECONDS", "1.5"))

PAYMENT_EXPIRY_HOURS = int(os.getenv("PAYMENT_EXPIRY_HOURS", "24"))

LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

PORT = int(os.getenv("PORT", "8000"))


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def payable_total(subtotal: int) -> int:
    """Subtotal plus the service fee."""
    return subtotal + SERVICE_FEE


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

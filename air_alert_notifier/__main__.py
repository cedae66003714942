"""Allow ``python -m air_alert_notifier``."""

from .main import main

main()

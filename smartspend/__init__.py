"""
SmartSpend: a Telegram bot that turns free-form messages such as
"Coffee $5.50" into categorized expense records.
"""

__version__ = "1.0.0"

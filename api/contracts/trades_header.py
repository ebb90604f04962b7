"""
Canonical header for the trades CSV export.
Keep this the single source of truth for downstream consumers.
"""

# Order of columns is contractually significant.
TRADES_HEADER = [
    "Date",  # MM/DD/YYYY, the stored trade date
    "Entry Time",  # h:mm AM/PM in the user's timezone
    "Exit Time",
    "Duration",  # "<n> min" or "-"
    "Ticker",
    "Direction",  # long or short
    "Contracts",
    "P&L",  # user's currency, before commission
    "Commission/Contract",
    "Net P&L",
    "Notes",
]

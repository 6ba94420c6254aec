"""
Static ticker configuration: headline indicators and sector membership.
"""

# Headline market indicators, displayed in this order
MARKET_INDICATORS = (
    "^DJI",   # Dow Jones Industrial Average
    "^GSPC",  # S&P 500
    "^IXIC",  # Nasdaq Composite
)

# Each sector ends with its SPDR sector ETF
SECTORS = {
    "Finance": (
        "JPM", "GS", "BAC", "WFC", "C", "AXP", "BRK.B", "BLK", "V", "SCHW", "XLF",
    ),
    "Technology": (
        "AAPL", "MSFT", "GOOGL", "NVDA", "META", "AMD", "INTC", "TSM", "CRM", "ORCL", "XLK",
    ),
    "Healthcare": (
        "JNJ", "PFE", "MRK", "UNH", "ABBV", "TMO", "ABT", "LLY", "BMY", "CVS", "XLV",
    ),
    "Energy": (
        "XOM", "CVX", "COP", "SLB", "PSX", "EOG", "VLO", "MPC", "KMI", "HAL", "XLE",
    ),
    "Consumer Discretionary": (
        "AMZN", "TSLA", "HD", "NKE", "SBUX", "MCD", "LOW", "TGT", "BKNG", "ROST", "XLY",
    ),
    "Consumer Staples": (
        "PG", "KO", "PEP", "WMT", "COST", "MO", "PM", "CL", "KHC", "KR", "XLP",
    ),
    "Industrials": (
        "BA", "CAT", "GE", "UPS", "UNP", "DE", "MMM", "LMT", "RTX", "NOC", "XLI",
    ),
    "Utilities": (
        "NEE", "DUK", "SO", "D", "AEP", "EXC", "SRE", "PEG", "XEL", "ED", "XLU",
    ),
    "Materials": (
        "LIN", "SHW", "NEM", "DD", "FCX", "APD", "ECL", "NUE", "MLM", "ALB", "XLB",
    ),
    "Real Estate": (
        "PLD", "AMT", "CCI", "EQIX", "O", "SPG", "DLR", "WELL", "AVB", "VTR", "XLRE",
    ),
    "Communication Services": (
        "GOOGL", "META", "DIS", "NFLX", "TMUS", "VZ", "T", "CHTR", "EA", "XLC",
    ),
}

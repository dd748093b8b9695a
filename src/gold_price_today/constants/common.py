"""Common constants used across the gold_price_today package."""

# Chart series labels used by the source site (exact, case-sensitive)
BUY_SERIES_LABEL = "Mua vào"
SELL_SERIES_LABEL = "Bán ra"

# Marker substrings identifying the chart configuration script
CHART_LIBRARY_MARKER = "highcharts"
CATEGORIES_MARKER = "categories"

# Date labels on the chart's x axis, e.g. "17/10"
DATE_LABEL_FORMAT = "%d/%m"

# Serialized record keys
RECORD_KEY_TYPE = "type"
RECORD_KEY_DATES = "dates"
RECORD_KEY_BUY_PRICES = "buy_prices"
RECORD_KEY_SELL_PRICES = "sell_prices"
RECORD_KEY_UPDATED_AT = "updated_at"

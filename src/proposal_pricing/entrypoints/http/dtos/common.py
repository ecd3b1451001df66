MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"
RATE_PATTERN = r"^\d+(\.\d{1,6})?$"

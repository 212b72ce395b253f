# Purpose: Configuration variables for the Bond Yield Calculator Flask application.
# Loaded with app.config.from_object("config"); only UPPERCASE names are picked up.

"""
Configuration settings for the Flask application.
"""

import os

# Payloads are five numbers and an enum; anything large is not a bond request
MAX_CONTENT_LENGTH = 64 * 1024

SERVICE_NAME = "bond-yield-calculator"

# Port for the development server (`python app.py`)
PORT = int(os.environ.get("PORT", "3000"))

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

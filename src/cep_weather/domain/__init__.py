"""
cep_weather.domain

Pure domain helpers.

Responsibilities:
- Postal code validation and request parsing.
- Temperature conversion and the composed weather response model.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O; both services import it unchanged.

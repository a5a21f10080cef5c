"""
cep_weather.clients

Outbound provider clients.

Responsibilities:
- Provide client interfaces for the postal lookup and weather providers.
- Own the shared outbound HTTP pool factory.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestration graph depends on this boundary (not on httpx directly).

"""
cep_weather.api

HTTP API package (FastAPI).

Responsibilities:
- App factories, dependency wiring, routers and error rendering for both services.
"""

# Package marker.

"""
cep_weather.services

Service layer.

Responsibilities:
- Own graph invocation for each inbound request and surface its outcome.
"""

# Package marker.

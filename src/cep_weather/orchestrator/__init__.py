"""
cep_weather.orchestrator

Orchestration package (LangGraph state machines).

Responsibilities:
- Typed state schemas, nodes, routing, and graph compilation for the gateway
  and resolver pipelines.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should use the service layer; graphs are compiled once per app.

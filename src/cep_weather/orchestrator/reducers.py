"""
cep_weather.orchestrator.reducers

Reducers define how LangGraph merges partial state updates returned by nodes.
"""

from __future__ import annotations


def append_steps(left: list[str] | None, right: list[str] | None) -> list[str]:
    """
    Append-only reducer for the list of pipeline steps that ran.

    Nodes return `{"steps": ["<node>"]}` and this reducer concatenates.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]

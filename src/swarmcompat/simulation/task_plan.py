"""Deterministic task breakdown for an objective under a strategy.

Only the leading task quotes the objective; the following tasks use fixed
phrases.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

from ..models import Strategy, TaskDescriptor, TaskPlan

# (type, description template); "{objective}" only ever appears in the first entry
_Template = List[Tuple[str, str]]

STRATEGY_TEMPLATES: Dict[Strategy, _Template] = {
    Strategy.RESEARCH: [
        ("research", "Research background information on: {objective}"),
        ("analysis", "Analyze findings and identify key patterns"),
        ("synthesis", "Synthesize research into actionable insights"),
    ],
    Strategy.DEVELOPMENT: [
        ("planning", "Plan architecture and design for: {objective}"),
        ("implementation", "Implement core functionality"),
        ("testing", "Test and validate implementation"),
        ("documentation", "Document the solution"),
    ],
    Strategy.ANALYSIS: [
        ("data-gathering", "Gather relevant data for: {objective}"),
        ("analysis", "Perform detailed analysis"),
        ("visualization", "Create visualizations and reports"),
    ],
}

# Auto strategy: first rule whose keywords occur in the objective wins
AUTO_RULES: List[Tuple[Tuple[str, ...], _Template]] = [
    (("build", "create"), [
        ("planning", "Plan solution for: {objective}"),
        ("implementation", "Implement the solution"),
        ("testing", "Test and validate"),
    ]),
    (("research", "analyze"), [
        ("research", "Research: {objective}"),
        ("analysis", "Analyze findings"),
        ("report", "Generate report"),
    ]),
]

AUTO_DEFAULT: _Template = [
    ("exploration", "Explore requirements for: {objective}"),
    ("execution", "Execute main tasks"),
    ("validation", "Validate results"),
]


def _select_template(objective: str, strategy: Strategy) -> _Template:
    if strategy in STRATEGY_TEMPLATES:
        return STRATEGY_TEMPLATES[strategy]
    lowered = objective.lower()
    for keywords, template in AUTO_RULES:
        if any(keyword in lowered for keyword in keywords):
            return template
    return AUTO_DEFAULT


def generate_task_plan(objective: str, strategy: Union[Strategy, str] = Strategy.AUTO) -> TaskPlan:
    """Build the ordered task plan for ``objective``.

    Pure function: the same inputs always give the same plan.

    Raises:
        ValueError: if ``strategy`` is not a known strategy name.
    """
    strategy = Strategy(strategy)
    template = _select_template(objective, strategy)
    return tuple(
        TaskDescriptor(
            type=task_type,
            description=text.format(objective=objective) if index == 0 else text,
        )
        for index, (task_type, text) in enumerate(template)
    )

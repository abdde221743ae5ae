"""Conditional visibility of template questions.

A question may depend on one other question's answer. Dependencies form a
directed graph (edge ``A -> B`` when B depends on A) which is evaluated in
topological order, so a hidden question hides everything below it.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable

from app.core.logging import get_logger
from app.core.scoring.errors import ConfigurationError
from app.core.scoring.types import Answer, Dependency, Question, QuestionType, Template

logger = get_logger(__name__)


@dataclass(frozen=True)
class VisibilityResult:
    """Questions applicable to one answer set."""

    visible: frozenset[str]
    errors: list[ConfigurationError] = field(default_factory=list)


# =============================================================================
# Graph construction
# =============================================================================


def build_dependency_graph(template: Template) -> dict[str, list[str]]:
    """
    Build the adjacency list of the visibility graph.

    Dependencies on unknown questions are left out; ``check_template``
    reports those separately.

    Args:
        template: Template to inspect

    Returns:
        Mapping of question id -> ids of the questions that depend on it,
        both in template order
    """
    graph: dict[str, list[str]] = {q.id: [] for q in template.questions()}
    for question in template.questions():
        dep = question.depends_on
        if dep is not None and dep.question_id in graph:
            graph[dep.question_id].append(question.id)
    return graph


def topological_order(template: Template) -> list[str]:
    """
    Order question ids so every controlling question precedes its dependents.

    Uses Kahn's algorithm seeded in template order, so the result is stable
    for a given template.

    Raises:
        ConfigurationError: If the dependencies contain a cycle
    """
    graph = build_dependency_graph(template)
    indegree = {qid: 0 for qid in graph}
    for children in graph.values():
        for child in children:
            indegree[child] += 1

    queue = deque(qid for qid, degree in indegree.items() if degree == 0)
    order: list[str] = []
    while queue:
        qid = queue.popleft()
        order.append(qid)
        for child in graph[qid]:
            indegree[child] -= 1
            if indegree[child] == 0:
                queue.append(child)

    if len(order) < len(graph):
        cycles = _describe_cycles(template, set(graph) - set(order))
        raise ConfigurationError(
            f"Question dependencies contain {len(cycles)} cycle(s)",
            issues=[f"Dependency cycle: {cycle}" for cycle in cycles],
        )

    return order


def _describe_cycles(template: Template, unresolved: set[str]) -> list[str]:
    """Render each cycle among the unresolved questions as 'a -> b -> a'."""
    parents = {
        q.id: q.depends_on.question_id
        for q in template.questions()
        if q.depends_on is not None
    }
    reported: set[str] = set()
    cycles: list[str] = []

    for start in (q.id for q in template.questions() if q.id in unresolved):
        path: list[str] = []
        seen_at: dict[str, int] = {}
        node = start
        while node in parents and node not in seen_at and node not in reported:
            seen_at[node] = len(path)
            path.append(node)
            node = parents[node]
        if node in seen_at:
            loop = path[seen_at[node]:]
            reported.update(loop)
            # Walk in dependency direction: controller first
            loop.reverse()
            cycles.append(" -> ".join(loop + [loop[0]]))
        reported.update(path)

    return cycles


# =============================================================================
# Visibility evaluation
# =============================================================================


def answer_values(answers: Iterable[Answer]) -> dict[str, Any]:
    """Map question id -> submitted value, dropping blank (None) answers."""
    return {a.question_id: a.value for a in answers if a.value is not None}


def _same_value(left: Any, right: Any) -> bool:
    # Exact equality: True must not match 1, False must not match 0
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def dependency_met(dependency: Dependency, value: Any, controller: Question) -> bool:
    """
    Check whether a controlling answer satisfies a dependency.

    Multi-choice controllers match when the selection contains ``equals``;
    every other type needs exact equality.
    """
    if controller.type == QuestionType.MULTI_CHOICE and isinstance(value, (list, tuple)):
        return any(_same_value(item, dependency.equals) for item in value)
    return _same_value(value, dependency.equals)


def resolve_visibility(template: Template, answers: Iterable[Answer]) -> VisibilityResult:
    """
    Determine which questions apply to an answer set.

    A question without ``depends_on`` is always visible. A dependent question
    is visible only if its controller is visible, was answered, and the
    answer meets the dependency.

    Args:
        template: Template being scored
        answers: Submitted answers

    Returns:
        VisibilityResult; on a configuration problem ``visible`` is empty and
        the problem is listed in ``errors``
    """
    try:
        order = topological_order(template)
    except ConfigurationError as e:
        logger.warning(f"Cannot resolve visibility for template {template.id}: {e}")
        return VisibilityResult(visible=frozenset(), errors=[e])

    questions = template.question_map()
    values = answer_values(answers)
    visible: set[str] = set()

    for qid in order:
        dep = questions[qid].depends_on
        if dep is None:
            visible.add(qid)
            continue

        controller = questions.get(dep.question_id)
        if controller is None or dep.question_id not in visible:
            continue
        if dep.question_id not in values:
            continue
        if dependency_met(dep, values[dep.question_id], controller):
            visible.add(qid)

    logger.debug(
        f"Visibility resolved for template {template.id}: "
        f"{len(visible)}/{len(order)} questions visible"
    )

    return VisibilityResult(visible=frozenset(visible), errors=[])

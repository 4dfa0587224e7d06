"""Project plan builder: create a batch of work packages, then link them.

A plan is a list of ``TaskSpec`` entries whose ``depends_on`` values are
positions inside the same list. Any entry may point at any other, including
later ones, so every work package must exist before the first relation is
created:

1. create each work package in batch order and record its id by position;
2. walk the batch again and create one ``follows`` relation per in-range
   dependency index (successor = the entry, predecessor = the dependency).

Failures propagate as soon as they happen. Nothing already created on the
server is rolled back; the abort is logged with the ids created so far so
they can be cleaned up by hand.
"""

from __future__ import annotations

import structlog

from modules.openproject.client import OpenProjectClient, OpenProjectError, ResponseParseError
from modules.openproject.models import PlanManifest, TaskSpec

logger = structlog.get_logger()

FOLLOWS = "follows"


class ProjectPlanBuilder:
    """Realise a task batch as OpenProject work packages and relations."""

    def __init__(self, client: OpenProjectClient):
        self.client = client

    def build(self, project_id: int | str, tasks: list[TaskSpec]) -> PlanManifest:
        created_ids: list[int] = []
        relations_created = 0

        logger.info("plan_build_started", project_id=project_id, tasks=len(tasks))

        try:
            # Phase 1: create every work package before linking any of them.
            for position, task in enumerate(tasks):
                wp = self.client.create_work_package(
                    project_id,
                    task.subject,
                    start_date=task.start_date,
                    due_date=task.due_date,
                    description=task.description,
                )
                if wp.id is None:
                    raise ResponseParseError(
                        f"create work package '{task.subject}'", ValueError("response has no id")
                    )
                created_ids.append(wp.id)
                logger.info("plan_task_created", position=position, subject=task.subject, work_package_id=wp.id)

            # Phase 2: one "follows" relation per in-range dependency.
            for position, task in enumerate(tasks):
                for dep_index in task.depends_on:
                    if not 0 <= dep_index < len(created_ids):
                        logger.debug("plan_dependency_skipped", position=position, depends_on=dep_index)
                        continue
                    self.client.create_relation(created_ids[position], created_ids[dep_index], FOLLOWS)
                    relations_created += 1
                    logger.info(
                        "plan_relation_created",
                        successor=created_ids[position],
                        predecessor=created_ids[dep_index],
                    )
        except OpenProjectError as e:
            logger.error(
                "plan_build_aborted",
                project_id=project_id,
                phase="link" if len(created_ids) == len(tasks) else "create",
                created_ids=created_ids,
                relations_created=relations_created,
                error=str(e),
            )
            raise

        logger.info(
            "plan_build_completed",
            project_id=project_id,
            tasks_created=len(created_ids),
            relations_created=relations_created,
        )
        return PlanManifest(
            success=True,
            tasks_created=len(created_ids),
            relations_created=relations_created,
            created_ids=created_ids,
        )

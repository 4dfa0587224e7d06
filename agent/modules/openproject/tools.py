"""OpenProject module tool implementations.

Wraps the synchronous OpenProjectClient with asyncio.to_thread for async
FastAPI compatibility. Every tool returns pretty-printed JSON text.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from modules.openproject.client import OpenProjectClient
from modules.openproject.models import TaskSpec
from modules.openproject.planner import ProjectPlanBuilder

logger = structlog.get_logger()

_TASK_LIST = TypeAdapter(list[TaskSpec])


def _to_json(value: Any) -> str:
    """Serialize models (or lists of them) the way the API spells them."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, exclude_none=True)
    elif isinstance(value, list):
        value = [
            v.model_dump(by_alias=True, exclude_none=True) if isinstance(v, BaseModel) else v
            for v in value
        ]
    return json.dumps(value, indent=2, ensure_ascii=False)


def parse_task_list(tasks_json: str | list) -> list[TaskSpec]:
    """Parse a plan batch from a JSON string or an already-decoded list.

    Raises:
        ValueError: If the input isn't a JSON array of task objects.
    """
    if isinstance(tasks_json, str):
        try:
            tasks_json = json.loads(tasks_json)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON format: {e}") from e
    try:
        return _TASK_LIST.validate_python(tasks_json)
    except ValidationError as e:
        raise ValueError(f"Invalid task list: {e}") from e


class OpenProjectTools:
    """Tool implementations for OpenProject projects, tasks and plans."""

    def __init__(self, client: OpenProjectClient):
        self.client = client
        self.planner = ProjectPlanBuilder(client)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def list_projects(self) -> str:
        logger.info("openproject_list_projects")
        projects = await asyncio.to_thread(self.client.list_projects)
        return _to_json(projects)

    async def get_project(self, project_id: str) -> str:
        logger.info("openproject_get_project", project_id=project_id)
        project = await asyncio.to_thread(self.client.get_project, project_id)
        return _to_json(project)

    async def create_project(
        self,
        name: str,
        identifier: str,
        description: str | None = None,
        parent_id: str | None = None,
    ) -> str:
        logger.info("openproject_create_project", name=name, identifier=identifier)
        project = await asyncio.to_thread(
            self.client.create_project, name, identifier, description, parent_id
        )
        return _to_json(project)

    # ------------------------------------------------------------------
    # Work packages
    # ------------------------------------------------------------------

    async def list_work_packages(self, project_id: str) -> str:
        logger.info("openproject_list_work_packages", project_id=project_id)
        work_packages = await asyncio.to_thread(self.client.list_work_packages, project_id)
        return _to_json(work_packages)

    async def create_work_package(
        self,
        project_id: str,
        subject: str,
        start_date: str | None = None,
        due_date: str | None = None,
        description: str | None = None,
        type_id: int | None = None,
    ) -> str:
        logger.info("openproject_create_work_package", project_id=project_id, subject=subject)
        wp = await asyncio.to_thread(
            self.client.create_work_package,
            project_id,
            subject,
            start_date,
            due_date,
            description,
            type_id,
        )
        return _to_json(wp)

    async def delete_work_package(self, work_package_id: int) -> str:
        logger.info("openproject_delete_work_package", work_package_id=work_package_id)
        await asyncio.to_thread(self.client.delete_work_package, work_package_id)
        return _to_json({"success": True, "deleted": work_package_id})

    # ------------------------------------------------------------------
    # Dependencies and plans
    # ------------------------------------------------------------------

    async def create_dependency(self, successor_id: int, predecessor_id: int) -> str:
        """Make ``successor_id`` start after ``predecessor_id`` finishes."""
        logger.info("openproject_create_dependency", successor=successor_id, predecessor=predecessor_id)
        relation = await asyncio.to_thread(
            self.client.create_relation, successor_id, predecessor_id, "follows"
        )
        return _to_json(relation)

    async def create_project_plan(self, project_id: str, tasks_json: str | list) -> str:
        """Create a batch of tasks plus their dependencies in one call.

        A batch that can't be parsed is reported as ``{"success": false}``
        instead of raising. Failures while talking to OpenProject propagate.
        """
        logger.info("openproject_create_project_plan", project_id=project_id)
        try:
            tasks = parse_task_list(tasks_json)
        except ValueError as e:
            logger.warning("openproject_plan_rejected", project_id=project_id, error=str(e))
            return _to_json({"success": False, "error": str(e)})

        manifest = await asyncio.to_thread(self.planner.build, project_id, tasks)
        return _to_json(manifest)

"""Pydantic models for OpenProject API v3 resources and tool payloads.

Resource models only declare the fields this module reads. Anything else the
server sends is dropped on validation, so new API fields never break parsing.
JSON names (``startDate``, ``_links``, ...) are kept as aliases; dump with
``by_alias=True`` to get the service's spelling back.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Resource(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Link(_Resource):
    href: str | None = None
    title: str | None = None


class Formattable(_Resource):
    """Rich-text block (``{"raw": ..., "html": ...}``)."""

    raw: str | None = None
    html: str | None = None


# ── Projects ────────────────────────────────────────────────────────────


class ProjectLinks(_Resource):
    self_link: Link | None = Field(default=None, alias="self")
    parent: Link | None = None


class Project(_Resource):
    id: int | None = None
    identifier: str | None = None
    name: str | None = None
    description: Formattable | None = None
    active: bool | None = None
    public: bool | None = None
    links: ProjectLinks = Field(default_factory=ProjectLinks, alias="_links")


# ── Work packages ───────────────────────────────────────────────────────


class WorkPackageLinks(_Resource):
    self_link: Link | None = Field(default=None, alias="self")
    project: Link | None = None
    type: Link | None = None
    status: Link | None = None


class WorkPackage(_Resource):
    id: int | None = None
    subject: str | None = None
    description: Formattable | None = None
    # Dates stay as the server's YYYY-MM-DD strings; never reformatted.
    start_date: str | None = Field(default=None, alias="startDate")
    due_date: str | None = Field(default=None, alias="dueDate")
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
    schedule_manually: bool | None = Field(default=None, alias="scheduleManually")
    links: WorkPackageLinks = Field(default_factory=WorkPackageLinks, alias="_links")


# ── Relations ───────────────────────────────────────────────────────────

RELATION_TYPES = (
    "relates", "duplicates", "duplicated", "blocks", "blocked", "precedes",
    "follows", "includes", "partof", "requires", "required",
)


class RelationLinks(_Resource):
    self_link: Link | None = Field(default=None, alias="self")
    from_link: Link | None = Field(default=None, alias="from")
    to_link: Link | None = Field(default=None, alias="to")


class Relation(_Resource):
    id: int | None = None
    name: str | None = None
    type: str | None = None
    reverse_type: str | None = Field(default=None, alias="reverseType")
    description: str | None = None
    delay: int | None = None
    links: RelationLinks = Field(default_factory=RelationLinks, alias="_links")


# ── Project plan payloads ───────────────────────────────────────────────


class TaskSpec(_Resource):
    """One entry of a project-plan batch.

    ``depends_on`` holds zero-based positions of other entries in the same
    batch, not work package ids.
    """

    subject: str
    start_date: str | None = Field(default=None, alias="startDate")
    due_date: str | None = Field(default=None, alias="dueDate")
    description: str | None = None
    depends_on: list[int] = Field(default_factory=list, alias="dependsOn")

    @field_validator("depends_on", mode="before")
    @classmethod
    def _null_means_no_dependencies(cls, value):
        return [] if value is None else value


class PlanManifest(_Resource):
    """Summary returned after a project plan was fully created."""

    success: bool = True
    tasks_created: int = Field(alias="tasksCreated")
    relations_created: int = Field(alias="relationsCreated")
    created_ids: list[int] = Field(alias="createdIdentifiers")

"""OpenProject REST API v3 client.

Synchronous on purpose: every method is a single blocking round trip with no
retries or caching. The async tool layer runs these calls in a worker thread.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from modules.openproject.models import RELATION_TYPES, Project, Relation, WorkPackage

logger = structlog.get_logger()

API_PREFIX = "/api/v3"

ModelT = TypeVar("ModelT", bound=BaseModel)


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------


class OpenProjectError(RuntimeError):
    """Base class for every failure raised by the client."""

    def __init__(self, message: str, context: str):
        super().__init__(message)
        self.context = context


class RemoteRequestError(OpenProjectError):
    """OpenProject answered with a non-2xx status."""

    def __init__(self, status_code: int, raw_body: str, context: str):
        super().__init__(
            f"Failed to {context}: OpenProject returned {status_code}: {raw_body[:500]}",
            context,
        )
        self.status_code = status_code
        self.raw_body = raw_body


class ResponseParseError(OpenProjectError):
    """A 2xx response body didn't match the expected shape."""

    def __init__(self, context: str, cause: Exception):
        super().__init__(f"Failed to parse response to {context}: {cause}", context)
        self.cause = cause


class RemoteConnectionError(OpenProjectError):
    """The request never produced an HTTP response."""

    def __init__(self, context: str, cause: Exception):
        super().__init__(f"Failed to {context}: could not reach OpenProject: {cause}", context)
        self.cause = cause


# ------------------------------------------------------------------
# Client
# ------------------------------------------------------------------


def _api_href(path: str) -> str:
    return f"{API_PREFIX}{path}"


class OpenProjectClient:
    """Thin client over the OpenProject JSON/HAL API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        default_type_id: int = 1,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_type_id = default_type_id
        # OpenProject API keys use basic auth with the fixed user "apikey".
        self._client = httpx.Client(
            base_url=f"{self.base_url}{API_PREFIX}",
            auth=("apikey", api_key),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, context: str, **kwargs) -> httpx.Response:
        """Send a request and return the response, raising on non-2xx."""
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("openproject_connection_failed", context=context, error=str(e))
            raise RemoteConnectionError(context, e) from e

        if not resp.is_success:
            logger.error(
                "openproject_request_failed",
                context=context,
                status=resp.status_code,
                body=resp.text[:500],
            )
            raise RemoteRequestError(resp.status_code, resp.text, context)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, context: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            logger.error("openproject_invalid_json", context=context, body=resp.text[:500])
            raise ResponseParseError(context, e) from e

    def _decode(self, resp: httpx.Response, model: type[ModelT], context: str) -> ModelT:
        data = self._json(resp, context)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("openproject_decode_failed", context=context, model=model.__name__)
            raise ResponseParseError(context, e) from e

    def _decode_collection(
        self, resp: httpx.Response, model: type[ModelT], context: str
    ) -> list[ModelT]:
        """Unwrap a ``{"_embedded": {"elements": [...]}}`` collection."""
        data = self._json(resp, context)
        try:
            elements = data["_embedded"]["elements"]
        except (KeyError, TypeError) as e:
            logger.error("openproject_envelope_missing", context=context)
            raise ResponseParseError(context, e) from e
        if not isinstance(elements, list):
            raise ResponseParseError(
                context, TypeError(f"_embedded.elements is {type(elements).__name__}, not a list")
            )

        try:
            return [model.model_validate(element) for element in elements]
        except ValidationError as e:
            logger.error("openproject_decode_failed", context=context, model=model.__name__)
            raise ResponseParseError(context, e) from e

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def list_projects(self) -> list[Project]:
        """List all projects visible to the API user, in server order."""
        context = "list projects"
        resp = self._request("GET", "/projects", context)
        return self._decode_collection(resp, Project, context)

    def get_project(self, project_id: int | str) -> Project:
        """Get a project by numeric id or identifier (slug)."""
        context = f"get project {project_id}"
        resp = self._request("GET", f"/projects/{project_id}", context)
        return self._decode(resp, Project, context)

    def create_project(
        self,
        name: str,
        identifier: str,
        description: str | None = None,
        parent_id: int | str | None = None,
    ) -> Project:
        """Create a project, optionally as a child of ``parent_id``."""
        payload: dict[str, Any] = {"name": name, "identifier": identifier}
        if description is not None:
            payload["description"] = {"raw": description}
        if parent_id is not None:
            payload["_links"] = {"parent": {"href": _api_href(f"/projects/{parent_id}")}}

        context = f"create project '{identifier}'"
        logger.debug("openproject_create_project", identifier=identifier, parent_id=parent_id)
        resp = self._request("POST", "/projects", context, json=payload)
        return self._decode(resp, Project, context)

    # ------------------------------------------------------------------
    # Work packages
    # ------------------------------------------------------------------

    def list_work_packages(self, project_id: int | str) -> list[WorkPackage]:
        """List the work packages of a project (first page only)."""
        context = f"list work packages for project {project_id}"
        resp = self._request("GET", f"/projects/{project_id}/work_packages", context)
        return self._decode_collection(resp, WorkPackage, context)

    def create_work_package(
        self,
        project_id: int | str,
        subject: str,
        start_date: str | None = None,
        due_date: str | None = None,
        description: str | None = None,
        type_id: int | None = None,
    ) -> WorkPackage:
        """Create a manually scheduled work package.

        Dates are sent exactly as given (``YYYY-MM-DD``); ``None`` becomes
        JSON null. ``type_id`` falls back to the configured default type.
        """
        if type_id is None:
            type_id = self.default_type_id
        payload = {
            "subject": subject,
            "description": {"raw": description if description is not None else ""},
            "startDate": start_date,
            "dueDate": due_date,
            "scheduleManually": True,
            "_links": {
                "type": {"href": _api_href(f"/types/{type_id}")},
            },
        }

        context = f"create work package in project {project_id}"
        logger.debug("openproject_create_work_package", project_id=project_id, subject=subject)
        resp = self._request("POST", f"/projects/{project_id}/work_packages", context, json=payload)
        return self._decode(resp, WorkPackage, context)

    def delete_work_package(self, work_package_id: int) -> None:
        """Delete a work package. OpenProject answers 204 No Content."""
        context = f"delete work package {work_package_id}"
        self._request("DELETE", f"/work_packages/{work_package_id}", context)

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def create_relation(self, from_id: int, to_id: int, relation_type: str = "follows") -> Relation:
        """Create a relation owned by ``from_id``.

        With ``follows``, ``from_id`` is the successor and ``to_id`` the
        predecessor: ``from_id`` starts after ``to_id`` is finished.
        """
        if relation_type not in RELATION_TYPES:
            raise ValueError(f"Unknown relation type: '{relation_type}'")

        payload = {
            "type": relation_type,
            "_links": {
                "from": {"href": _api_href(f"/work_packages/{from_id}")},
                "to": {"href": _api_href(f"/work_packages/{to_id}")},
            },
        }

        context = f"create {relation_type} relation from {from_id} to {to_id}"
        resp = self._request("POST", f"/work_packages/{from_id}/relations", context, json=payload)
        return self._decode(resp, Relation, context)

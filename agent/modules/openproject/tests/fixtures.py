"""Test fixtures and mock data for OpenProject module tests."""

from __future__ import annotations

PROJECTS_RESPONSE = {
    "_type": "Collection",
    "total": 2,
    "count": 2,
    "_embedded": {
        "elements": [
            {
                "_type": "Project",
                "id": 1,
                "identifier": "my-project",
                "name": "My Project",
                "active": True,
                "public": False,
                "description": {"format": "markdown", "raw": "First project", "html": "<p>First project</p>"},
                "createdAt": "2025-01-10T09:00:00Z",
                "_links": {
                    "self": {"href": "/api/v3/projects/1", "title": "My Project"},
                    "parent": {"href": None},
                    "categories": {"href": "/api/v3/projects/1/categories"},
                },
            },
            {
                "_type": "Project",
                "id": 2,
                "identifier": "another-project",
                "name": "Another Project",
                "active": True,
                "_links": {
                    "self": {"href": "/api/v3/projects/2", "title": "Another Project"},
                    "parent": {"href": "/api/v3/projects/1", "title": "My Project"},
                },
            },
        ]
    },
}

PROJECT_RESPONSE = {
    "_type": "Project",
    "id": 3,
    "identifier": "gantt-demo",
    "name": "Gantt Demo",
    "active": True,
    "description": {"raw": "Demo project"},
    "_links": {"self": {"href": "/api/v3/projects/3", "title": "Gantt Demo"}},
}

WORK_PACKAGES_RESPONSE = {
    "_type": "Collection",
    "_embedded": {
        "elements": [
            {
                "_type": "WorkPackage",
                "id": 101,
                "lockVersion": 0,
                "subject": "Task 1",
                "startDate": "2025-02-01",
                "dueDate": "2025-02-05",
                "scheduleManually": True,
                "percentageDone": 0,
                "_links": {
                    "self": {"href": "/api/v3/work_packages/101", "title": "Task 1"},
                    "project": {"href": "/api/v3/projects/1", "title": "My Project"},
                    "type": {"href": "/api/v3/types/1", "title": "Task"},
                    "status": {"href": "/api/v3/statuses/1", "title": "New"},
                },
            },
            {
                "_type": "WorkPackage",
                "id": 102,
                "subject": "Task 2",
                "startDate": "2025-02-06",
                "dueDate": "2025-02-10",
            },
        ]
    },
}

EMPTY_COLLECTION_RESPONSE = {"_type": "Collection", "total": 0, "_embedded": {"elements": []}}


def work_package_response(wp_id: int, subject: str, start_date: str | None = None,
                          due_date: str | None = None) -> dict:
    """Build a single work package body like OpenProject returns on create."""
    return {
        "_type": "WorkPackage",
        "id": wp_id,
        "subject": subject,
        "description": {"format": "markdown", "raw": "", "html": ""},
        "startDate": start_date,
        "dueDate": due_date,
        "scheduleManually": True,
        "_links": {
            "self": {"href": f"/api/v3/work_packages/{wp_id}", "title": subject},
            "type": {"href": "/api/v3/types/1", "title": "Task"},
        },
    }


def relation_response(rel_id: int, from_id: int, to_id: int, rel_type: str = "follows") -> dict:
    return {
        "_type": "Relation",
        "id": rel_id,
        "name": rel_type,
        "type": rel_type,
        "reverseType": "precedes" if rel_type == "follows" else rel_type,
        "description": None,
        "delay": 0,
        "_links": {
            "self": {"href": f"/api/v3/relations/{rel_id}"},
            "from": {"href": f"/api/v3/work_packages/{from_id}", "title": f"WP {from_id}"},
            "to": {"href": f"/api/v3/work_packages/{to_id}", "title": f"WP {to_id}"},
        },
    }


NOT_FOUND_RESPONSE = {
    "_type": "Error",
    "errorIdentifier": "urn:openproject-org:api:v3:errors:NotFound",
    "message": "The requested resource could not be found.",
}

VALIDATION_ERROR_RESPONSE = {
    "_type": "Error",
    "errorIdentifier": "urn:openproject-org:api:v3:errors:PropertyConstraintViolation",
    "message": "Identifier has already been taken.",
}

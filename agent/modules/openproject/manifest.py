"""OpenProject module manifest — tool definitions."""

from shared.schemas.tools import ModuleManifest, ToolDefinition, ToolParameter

_PROJECT_ID = ToolParameter(
    name="project_id",
    type="string",
    description="Project identifier (slug, e.g. 'my-project') or numeric ID.",
)

MANIFEST = ModuleManifest(
    module_name="openproject",
    description=(
        "Manage projects and work packages (tasks) in OpenProject. Create "
        "projects, add tasks with start/due dates for the Gantt chart, link "
        "tasks with dependencies, or build a whole project plan in one call."
    ),
    tools=[
        # ── Projects ────────────────────────────────────────────────────
        ToolDefinition(
            name="openproject.list_projects",
            description="List all accessible projects. Returns project names, identifiers, and IDs.",
            parameters=[],
            required_permission="user",
        ),
        ToolDefinition(
            name="openproject.get_project",
            description="Get a single project by identifier or numeric ID.",
            parameters=[_PROJECT_ID],
            required_permission="user",
        ),
        ToolDefinition(
            name="openproject.create_project",
            description="Create a new project. Returns the created project with its ID and identifier.",
            parameters=[
                ToolParameter(name="name", type="string", description="Display name of the project."),
                ToolParameter(
                    name="identifier", type="string",
                    description="URL-friendly identifier (slug), e.g. 'my-project'. Lowercase, hyphens allowed, no spaces.",
                ),
                ToolParameter(name="description", type="string", description="Optional project description.", required=False),
                ToolParameter(
                    name="parent_id", type="string",
                    description="Optional parent project identifier or numeric ID, for sub-projects.",
                    required=False,
                ),
            ],
            required_permission="user",
        ),
        # ── Work packages ───────────────────────────────────────────────
        ToolDefinition(
            name="openproject.list_work_packages",
            description=(
                "List all work packages (tasks) in a project. "
                "Returns IDs, subjects, dates, and status for Gantt chart planning."
            ),
            parameters=[_PROJECT_ID],
            required_permission="user",
        ),
        ToolDefinition(
            name="openproject.create_work_package",
            description=(
                "Create a new work package (task) in a project. Use this to add tasks "
                "to a Gantt chart. Returns the created work package with its ID."
            ),
            parameters=[
                _PROJECT_ID,
                ToolParameter(name="subject", type="string", description="Title/subject of the work package."),
                ToolParameter(
                    name="start_date", type="string",
                    description="Start date in YYYY-MM-DD format, e.g. 2025-02-15.",
                    required=False,
                ),
                ToolParameter(
                    name="due_date", type="string",
                    description="Due date in YYYY-MM-DD format, e.g. 2025-02-20.",
                    required=False,
                ),
                ToolParameter(name="description", type="string", description="Optional task description.", required=False),
                ToolParameter(
                    name="type_id", type="integer",
                    description="Work package type ID. Defaults to the configured default type (usually 1 = Task).",
                    required=False,
                ),
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="openproject.delete_work_package",
            description="Delete a work package by its ID.",
            parameters=[
                ToolParameter(name="work_package_id", type="integer", description="ID of the work package to delete."),
            ],
            required_permission="user",
        ),
        # ── Dependencies and plans ──────────────────────────────────────
        ToolDefinition(
            name="openproject.create_dependency",
            description=(
                "Create a dependency between two work packages for Gantt scheduling. "
                "The successor starts after the predecessor is complete. "
                "Example: 'Testing follows Development' → successor=Testing, predecessor=Development."
            ),
            parameters=[
                ToolParameter(
                    name="successor_id", type="integer",
                    description="ID of the successor work package (the one that waits).",
                ),
                ToolParameter(
                    name="predecessor_id", type="integer",
                    description="ID of the predecessor work package (the one that must complete first).",
                ),
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="openproject.create_project_plan",
            description=(
                "Create a complete project plan with multiple tasks and dependencies in one call. "
                "Each task needs a subject and optionally startDate, dueDate, description, and "
                "dependsOn (array of zero-based indices of other tasks in the same list). "
                "Returns the number of tasks and relations created plus the new task IDs in order."
            ),
            parameters=[
                _PROJECT_ID,
                ToolParameter(
                    name="tasks_json", type="string",
                    description=(
                        "JSON array of tasks, e.g.: "
                        '[{"subject": "Design", "startDate": "2025-02-01", "dueDate": "2025-02-05"}, '
                        '{"subject": "Development", "startDate": "2025-02-06", "dueDate": "2025-02-15", "dependsOn": [0]}, '
                        '{"subject": "Testing", "startDate": "2025-02-16", "dueDate": "2025-02-20", "dependsOn": [1]}]'
                    ),
                ),
            ],
            required_permission="user",
        ),
    ],
)

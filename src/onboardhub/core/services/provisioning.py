"""Baseline onboarding content for new users and new empty versions."""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.resource import ResourceType
from ..models.template_item import Period, Priority
from ..repositories.resource_repository import ResourceRepository
from ..repositories.template_repository import TemplateRepository

logger = get_logger("services.provisioning")

DEFAULT_TEMPLATES = [
    # First day
    (Period.FIRST_DAY, "Complete IT setup and access accounts", Priority.HIGH),
    (Period.FIRST_DAY, "Meet your direct manager and team", Priority.HIGH),
    (Period.FIRST_DAY, "Review job description and expectations", Priority.HIGH),
    (Period.FIRST_DAY, "Complete required HR paperwork", Priority.MEDIUM),
    (Period.FIRST_DAY, "Take office tour and locate key areas", Priority.MEDIUM),
    # First week
    (Period.FIRST_WEEK, "Schedule 1:1s with key stakeholders", Priority.HIGH),
    (Period.FIRST_WEEK, "Review company handbook and policies", Priority.MEDIUM),
    (Period.FIRST_WEEK, "Set up development environment", Priority.HIGH),
    (Period.FIRST_WEEK, "Join relevant Slack channels and meetings", Priority.MEDIUM),
    (Period.FIRST_WEEK, "Complete security and compliance training", Priority.MEDIUM),
    # Second week
    (Period.SECOND_WEEK, "Shadow team members on current projects", Priority.HIGH),
    (Period.SECOND_WEEK, "Review codebase and documentation", Priority.HIGH),
    (Period.SECOND_WEEK, "Attend team retrospective and planning", Priority.MEDIUM),
    # Third week
    (Period.THIRD_WEEK, "Take on first small project or task", Priority.HIGH),
    (Period.THIRD_WEEK, "Provide feedback on onboarding process", Priority.LOW),
    # First month
    (Period.FIRST_MONTH, "Complete 30-day check-in with manager", Priority.HIGH),
    (Period.FIRST_MONTH, "Set goals for next 60 days", Priority.MEDIUM),
]

DEFAULT_RESOURCE_CATEGORIES = [
    {
        "category": "Design Tools & Systems",
        "job": "create consistent designs",
        "situation": "access to design systems and tools",
        "outcome": "work efficiently and maintain brand consistency",
        "resources": [
            ("Figma Component Library", ResourceType.TOOL, "#"),
            ("Design System Documentation", ResourceType.REFERENCE, "#"),
            ("Brand Guidelines", ResourceType.GUIDE, "#"),
        ],
    },
    {
        "category": "Process & Workflow",
        "job": "understand our design process",
        "situation": "clear workflow documentation",
        "outcome": "collaborate effectively with my team",
        "resources": [
            ("Design Process Playbook", ResourceType.GUIDE, "#"),
            ("Critique Guidelines", ResourceType.GUIDE, "#"),
            ("Handoff Checklist", ResourceType.TOOL, "#"),
        ],
    },
    {
        "category": "Research & Strategy",
        "job": "make informed design decisions",
        "situation": "access to user research and strategy docs",
        "outcome": "design with user needs in mind",
        "resources": [
            ("User Research Repository", ResourceType.TOOL, "#"),
            ("Question Bank", ResourceType.GUIDE, "#"),
            ("Usability Testing Templates", ResourceType.TOOL, "#"),
        ],
    },
]


async def seed_default_content(
    session: AsyncSession, user_id: UUID, version_id: Optional[UUID]
) -> dict:
    """Stage the baseline checklist and resource library; caller commits."""
    template_repo = TemplateRepository(session)
    resource_repo = ResourceRepository(session)

    for period, title, priority in DEFAULT_TEMPLATES:
        await template_repo.add_item(
            {
                "user_id": user_id,
                "version_id": version_id,
                "period": period.value,
                "title": title,
                "priority": priority.value,
                "completed": False,
            }
        )

    resource_count = 0
    for entry in DEFAULT_RESOURCE_CATEGORIES:
        category = await resource_repo.add_category(
            {
                "user_id": user_id,
                "version_id": version_id,
                "category": entry["category"],
                "job": entry["job"],
                "situation": entry["situation"],
                "outcome": entry["outcome"],
            }
        )
        for name, resource_type, url in entry["resources"]:
            await resource_repo.add_resource(
                {"category_id": category.id, "name": name, "type": resource_type.value, "url": url}
            )
            resource_count += 1

    logger.debug(f"Seeded default content for user {user_id} (version {version_id})")
    return {
        "templates": len(DEFAULT_TEMPLATES),
        "categories": len(DEFAULT_RESOURCE_CATEGORIES),
        "resources": resource_count,
    }

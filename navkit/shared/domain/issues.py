"""Issue models and the mock repositories that feed the Issues module."""

from __future__ import annotations

from typing import AsyncIterator, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict


class IssueUIModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    status: str


class IssueDetailUIModel(IssueUIModel):
    assignee: str
    priority: str
    created_date: str
    due_date: str
    reporter: str


class IssuesListRepositoryProtocol(Protocol):
    def get_all_issues(self) -> AsyncIterator[List[IssueUIModel]]: ...


class IssueDetailRepositoryProtocol(Protocol):
    def get_issue_detail(self, issue_id: str) -> AsyncIterator[Optional[IssueDetailUIModel]]: ...


SAMPLE_ISSUE_DETAILS: List[IssueDetailUIModel] = [
    IssueDetailUIModel(
        id="1",
        title="Issue 1",
        description="Critical bug in the authentication system causing login failures for certain users",
        status="Open",
        assignee="John Doe",
        priority="High",
        created_date="2024-10-01",
        due_date="2024-10-15",
        reporter="Jane Smith",
    ),
    IssueDetailUIModel(
        id="2",
        title="Issue 2",
        description="Feature request to add dark mode support across the entire application",
        status="Closed",
        assignee="Alice Johnson",
        priority="Medium",
        created_date="2024-09-15",
        due_date="2024-10-10",
        reporter="Bob Wilson",
    ),
    IssueDetailUIModel(
        id="3",
        title="Issue 3",
        description="Performance optimization needed for data loading on the dashboard page",
        status="In Progress",
        assignee="Mike Brown",
        priority="High",
        created_date="2024-10-05",
        due_date="2024-10-20",
        reporter="Sarah Davis",
    ),
]


class InMemoryIssuesListRepository:
    """Emits a static issue list once."""

    def __init__(self, issues: Optional[List[IssueUIModel]] = None):
        if issues is None:
            issues = [
                IssueUIModel(id=d.id, title=d.title, description=d.description, status=d.status)
                for d in SAMPLE_ISSUE_DETAILS
            ]
        self._issues = list(issues)

    async def get_all_issues(self) -> AsyncIterator[List[IssueUIModel]]:
        yield list(self._issues)


class InMemoryIssueDetailRepository:
    def __init__(self, details: Optional[List[IssueDetailUIModel]] = None):
        self._details = {d.id: d for d in (details if details is not None else SAMPLE_ISSUE_DETAILS)}

    async def get_issue_detail(self, issue_id: str) -> AsyncIterator[Optional[IssueDetailUIModel]]:
        yield self._details.get(issue_id)

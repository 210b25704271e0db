"""
Hypermedia shaping for employee representations.

Builds HAL-style `_links` for single employees and collection envelopes.
Nothing here touches the database; swap the builder to change or drop links.
"""

from typing import Iterable, Optional
from urllib.parse import urlencode

from app.schemas.employee import (
    EmbeddedEmployees,
    EmployeeCollection,
    EmployeeDTO,
    EmployeeModel,
    Link,
)


class EmployeeLinkBuilder:
    """Attaches self and collection links under a fixed base URL."""

    collection_rel = "employees"

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def collection_href(self) -> str:
        return f"{self.base_url}/employees"

    def item_href(self, employee_id: int) -> str:
        return f"{self.collection_href()}/{employee_id}"

    def search_by_name_href(self, prefix: str) -> str:
        return f"{self.collection_href()}/search/by-name?{urlencode({'prefix': prefix})}"

    def to_model(self, dto: EmployeeDTO) -> EmployeeModel:
        return EmployeeModel(
            **dto.model_dump(),
            links={
                "self": Link(href=self.item_href(dto.id)),
                self.collection_rel: Link(href=self.collection_href()),
            },
        )

    def to_collection(
        self,
        dtos: Iterable[EmployeeDTO],
        self_href: Optional[str] = None,
    ) -> EmployeeCollection:
        """
        Wrap DTOs into a collection envelope.

        Args:
            dtos: Employees to embed, each gets its own links
            self_href: Collection self link, defaults to the full listing URL
        """
        return EmployeeCollection(
            embedded=EmbeddedEmployees(employees=[self.to_model(dto) for dto in dtos]),
            links={"self": Link(href=self_href or self.collection_href())},
        )


class NoLinkBuilder(EmployeeLinkBuilder):
    """Plain REST shaping: same envelopes, no links."""

    def __init__(self):
        super().__init__(base_url="")

    def to_model(self, dto: EmployeeDTO) -> EmployeeModel:
        return EmployeeModel(**dto.model_dump())

    def to_collection(self, dtos, self_href=None) -> EmployeeCollection:
        return EmployeeCollection(
            embedded=EmbeddedEmployees(employees=[self.to_model(dto) for dto in dtos]),
        )

import math
from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, totalPages=math.ceil(total / limit) if limit else 0)


def success(data: dict | None = None, message: str | None = None, pagination: Pagination | None = None) -> dict:
    """Response envelope shared by every endpoint."""
    body: dict = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination.model_dump()
    return body

"""
Ticket Model
Pydantic models for issues as returned by the ticket store search.
"""
from typing import List, Literal
from pydantic import BaseModel, field_validator

TicketState = Literal["open", "closed"]


class Ticket(BaseModel):
    number: int
    title: str = ""
    body: str = ""
    state: TicketState = "open"

    @field_validator("title", "body", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # GitHub returns null for issues created without a body
        return "" if value is None else value


class TicketSearchResult(BaseModel):
    items: List[Ticket] = []

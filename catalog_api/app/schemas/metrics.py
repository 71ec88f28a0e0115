"""
Pydantic model describing a single operational counter.
"""

from pydantic import BaseModel, Field


class CounterRead(BaseModel):
    name: str = Field(..., examples=["users.created.total"])
    value: int = Field(..., examples=[3])
    description: str = Field("", examples=["Total number of users created"])

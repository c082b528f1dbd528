from __future__ import annotations

from typing import Dict, List, Literal, Union

from pydantic import BaseModel, Field

Expectation = Union[Literal["success", "failure", "forbidden"], List[int]]


class CheckSpec(BaseModel):
    # Not validated here; a bad URL is reported when the request is built.
    url: str
    method: str = Field(default="GET", min_length=1)
    headers: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    expect: Expectation = "success"


class Registry(BaseModel):
    checks: List[CheckSpec] = Field(default_factory=list)

import re
from typing import Dict, List, Optional, Union
from urllib.parse import parse_qs

from pydantic import BaseModel, ConfigDict, Field

ID_PATTERN = re.compile(r"[0-9]+")
UNAME_PATTERN = re.compile(r"[a-zA-Z0-9]+")

FormValue = Union[str, List[str]]


def parse_form(body: Optional[str]) -> Dict[str, FormValue]:
    """Decode a form body; repeated fields stay lists so no validator accepts them."""
    if not body:
        return {}
    parsed = parse_qs(body, keep_blank_values=True)
    return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}


def _matches(form: Dict[str, FormValue], field: str, pattern: re.Pattern) -> bool:
    value = form.get(field)
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def is_id(form: Dict[str, FormValue]) -> bool:
    return _matches(form, "id", ID_PATTERN)


def is_uname(form: Dict[str, FormValue]) -> bool:
    return _matches(form, "uname", UNAME_PATTERN)


class User(BaseModel):
    id: str
    uname: str


class HandlerEvent(BaseModel):
    """HTTP-style request handed to a handler."""

    model_config = ConfigDict(populate_by_name=True)

    path_parameters: Dict[str, str] = Field(default_factory=dict, alias="pathParameters")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None

    def form(self) -> Dict[str, FormValue]:
        return parse_form(self.body)

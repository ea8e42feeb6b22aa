# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Data models for the install tool."""

import re
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def to_int(value: Any) -> int:
    """
    Loose integer cast used for legacy database values.

    None and unparsable strings become 0; "12abc" becomes 12.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


class DomainEntry(BaseModel):
    """A legacy sys_domain record that carries a redirect."""
    uid: int
    domain_name: str = Field(default="", alias="domainName")
    redirect_to: str = Field(default="", alias="redirectTo")
    redirect_http_status_code: int = Field(default=0, alias="redirectHttpStatusCode")
    prepend_params: int = 0
    deleted: int = 0
    hidden: int = 0
    crdate: int = 0
    cruser_id: int = 0
    tstamp: int = 0

    model_config = {"populate_by_name": True}

    @field_validator(
        'uid', 'redirect_http_status_code', 'prepend_params', 'deleted',
        'hidden', 'crdate', 'cruser_id', 'tstamp',
        mode='before'
    )
    @classmethod
    def cast_int(cls, v):
        return to_int(v)

    @field_validator('domain_name', 'redirect_to', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else str(v)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DomainEntry":
        """Build from a raw sys_domain row, ignoring columns we don't map."""
        return cls.model_validate(row)


class Redirect(BaseModel):
    """A sys_redirect record."""
    deleted: int = 0
    disabled: int = 0
    createdon: int = 0
    createdby: int = 0
    updatedon: int = 0
    source_host: str = ""
    source_path: str = ""
    is_regexp: Optional[int] = None
    force_https: Optional[int] = None
    keep_query_parameters: int = 0
    target_statuscode: int = 0
    target: str = ""

    def to_row(self) -> Dict[str, Any]:
        """Column values to insert; unset flags fall back to the column default."""
        return self.model_dump(exclude_none=True)

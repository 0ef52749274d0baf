"""Pydantic models for records read from the dumps and for report rows."""

from typing import Optional

from pydantic import BaseModel, Field


class Page(BaseModel):
    """A row of page.sql."""

    id: int = Field(..., description="page_id")
    namespace: int = Field(..., description="page_namespace")
    title: str = Field(..., description="page_title, underscores for spaces")


class TemplateLink(BaseModel):
    """A row of templatelinks.sql.

    Older dumps name the target directly (namespace + title); newer ones point
    at a linktarget row instead. Transition-era dumps may carry both.
    """

    source_id: int = Field(..., description="tl_from")
    namespace: Optional[int] = Field(default=None, description="tl_namespace")
    title: Optional[str] = Field(default=None, description="tl_title")
    target_id: Optional[int] = Field(default=None, description="tl_target_id")


class LinkTarget(BaseModel):
    """A row of linktarget.sql."""

    id: int = Field(..., description="lt_id")
    namespace: int = Field(..., description="lt_namespace")
    title: str = Field(..., description="lt_title, underscores for spaces")


class WantedTemplate(BaseModel):
    """One ranked line of the report."""

    title: str = Field(..., description="Display title, spaces not underscores")
    count: int = Field(..., ge=1, description="Number of qualifying transclusions")

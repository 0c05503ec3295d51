"""Pydantic models for the [tool.release-maker] configuration table."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReleaseMakerConfig(BaseModel):
    """Settings for retrieving commits and building releases.

    Every value can be overridden from the command line.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_branch: str = Field(
        default="master",
        min_length=1,
        description="Branch whose remote tracking ref is walked",
    )
    remote: str = Field(
        default="origin",
        min_length=1,
        description="Remote providing the repository URL and tracking refs",
    )
    category: str = Field(
        default="any",
        min_length=1,
        description="Placeholder category for extracted changes",
    )

"""Pydantic models for TRX report content."""

from pydantic import Field

from results_reader.models.base import Model


class TrxUnitTest(Model):
    """A test declared in the TestDefinitions section of a TRX report."""

    name: str | None = Field(default=None, description="Display name of the test")
    execution_id: str | None = Field(
        default=None, description="Execution id used to join with results"
    )
    description: str | None = Field(default=None, description="Free-text description")
    parameters: dict[str, str] = Field(
        default_factory=dict, description="Test properties, used as parameters"
    )

"""Pydantic models for step answers."""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


class ResourceId(BaseModel):
    """Opaque identifier of a cloud resource (e.g. a droplet or SSH key)."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Resource kind (e.g., 'droplet')")
    id: str = Field(..., description="Provider-side identifier")

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"


# Bool is listed first so True never collapses into 1.
ResultValue = Union[StrictBool, StrictInt, StrictStr, ResourceId]


class Result(BaseModel):
    """
    The answer produced by one step.

    ``value`` is what the step collected. ``metadata`` carries auxiliary
    display data (a human-readable name, the list index that was picked)
    that later steps read when rendering summaries.
    """

    model_config = ConfigDict(frozen=True)

    value: Optional[ResultValue] = Field(None, description="The step's answer")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Auxiliary display values")

    def with_metadata(self, key: str, value: Any) -> "Result":
        """Return a copy of this result with one more metadata entry."""
        metadata = dict(self.metadata)
        metadata[key] = value
        return Result(value=self.value, metadata=metadata)

    def get_metadata(self, key: str, default: Any = None) -> Any:
        """Read a metadata entry, returning ``default`` when it is absent."""
        return self.metadata.get(key, default)

    def has_metadata(self, key: str) -> bool:
        return key in self.metadata

    def as_str(self) -> str:
        return self._expect(str)

    def as_int(self) -> int:
        return self._expect(int)

    def as_bool(self) -> bool:
        return self._expect(bool)

    def as_resource_id(self) -> ResourceId:
        return self._expect(ResourceId)

    def _expect(self, kind: type) -> Any:
        value = self.value
        # bool is a subclass of int; keep the variants apart
        if kind is int and isinstance(value, bool):
            raise TypeError(f"expected int result, got bool {value!r}")
        if not isinstance(value, kind):
            raise TypeError(f"expected {kind.__name__} result, got {type(value).__name__} {value!r}")
        return value


class StepResult(BaseModel):
    """A Result recorded in history under the name of the step that produced it."""

    model_config = ConfigDict(frozen=True)

    step_name: str = Field(..., description="Name of the step that produced the result")
    result: Result = Field(..., description="The recorded answer")


def new_result(value: Optional[ResultValue], **metadata: Any) -> Result:
    """Build a Result, taking metadata as keyword arguments."""
    return Result(value=value, metadata=metadata)
